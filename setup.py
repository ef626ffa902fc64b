# setup.py
from setuptools import setup, find_packages

setup(
    name="schema_harvest",
    version="0.1.0",
    description="Сбор JSON-LD разметки schema.org с сайтов в CSV по типам схем",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"schema_harvest": ["templates/*.j2"]},
    include_package_data=True,
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "jinja2>=3.1",
        "openai>=1.0",
        "pydantic>=2.5",
        "python-slugify>=8.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "schema-harvest=schema_harvest.cli:main",
        ],
    },
    python_requires=">=3.11",
)
