# setup.py
from setuptools import setup, find_packages

setup(
    name="lox",
    version="0.3.0",
    description="A tree-walking interpreter for the Lox language, with a language server and REPL server",
    packages=find_packages(include=["lox", "lox.*", "lox_lsp", "lox_lsp.*"]),
    python_requires=">=3.11",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": [
            "pytest",
            "hypothesis",
        ],
    },
    entry_points={
        "console_scripts": [
            "lox=lox.cli:run",
            "lox-ls=lox_lsp.server:main",
            "lox-repl-server=lox_lsp.repl_server:main",
        ],
    },
    zip_safe=False,
)
