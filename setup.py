# setup.py
from setuptools import setup, find_packages

setup(
    name="site-pulse",
    version="0.1.0",
    description="Concurrent page fetcher and content reporter SitePulse",
    packages=find_packages(include=["site_pulse", "site_pulse.*"]),
    package_data={"site_pulse": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "Jinja2>=3.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["site-pulse=site_pulse.cli:cli"],
    },
    python_requires=">=3.11",
)
