# setup.py
from setuptools import setup, find_packages

setup(
    name="site_fetch",
    version="0.1.0",
    description="Асинхронный обход сайта с извлечением текста и подсчётом токенов",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "Jinja2>=3.1",
        "markdownify>=0.11",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "readability-lxml>=0.8.1",
        "lxml_html_clean>=0.1",
        "tiktoken>=0.7",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "site-fetch=site_fetch.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
