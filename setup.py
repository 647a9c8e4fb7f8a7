# setup.py
from setuptools import setup, find_packages

setup(
    name="word_scout",
    version="0.1.0",
    description="Async depth-bounded crawler that builds wordlists from web sites and local trees",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "aiohttp>=3.9",
        "aiofiles>=23.1",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "decancer-py>=0.4",
        "filetype>=1.2",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "tldextract>=5.0",
        "Unidecode>=1.3",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "word_scout=word_scout.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
