from setuptools import setup, find_packages

setup(
    name="solcli",
    version="0.1.0",
    description="solcli - Solana wallet CLI for keypairs, balances and devnet airdrops",
    author="solcli Team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "solders>=0.21.0",
        "solana>=0.34.0,<0.40",
        "base58>=2.1.0",
        "httpx>=0.23.0",
        "python-dotenv>=0.19.0",
        "click>=8.0.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "black>=21.0.0",
            "isort>=5.0.0",
            "mypy>=0.900"
        ],
    },
    entry_points={
        "console_scripts": [
            "solcli=solcli.cli.main:main",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
