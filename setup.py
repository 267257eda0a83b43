from setuptools import setup, find_packages

setup(
    name="readme-word-analyzer",
    version="1.0.0",
    description="Most frequent words in the READMEs of a GitHub repository's pull request authors",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "aiohttp>=3.9.0",
        "requests>=2.31.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "readme-analyzer=readme_analyzer.cli:main",
        ],
    },
)
