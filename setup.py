from setuptools import find_packages, setup

setup(
    name="fwcatalog",
    version="0.1.0",
    description="Sequential scraper for firmware catalog device pages",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        "aiohttp",
        "beautifulsoup4",
        "platformdirs",
        "PyYAML",
        "rich",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
            "pytest-mock",
        ],
    },
    entry_points={
        "console_scripts": [
            "fwcatalog=fwcatalog.cli:main",
        ],
    },
)
