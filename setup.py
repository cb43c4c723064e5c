# setup.py
from setuptools import setup, find_packages

setup(
    name="keyword_scout",
    version="0.1.0",
    description="Асинхронный сборщик ключевых фраз из sitemap и генератор статей KeywordScout",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "lxml>=5.0",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "click>=8.1",
        "openai>=1.0",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "keyword_scout=keyword_scout.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
