from setuptools import setup, find_packages

setup(
    name="webpage",
    version="0.1.0",
    description="Capture webpages as PDFs or screenshots with headless Chromium",
    author="Webpage Team",
    packages=find_packages(exclude=["*.tests", "*.tests.*", "tests"]),
    install_requires=[
        "pydantic>=2.0.0",
        "playwright>=1.40.0",
        "click>=8.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "psutil>=5.9.0",
            "black>=22.0.0",
            "isort>=5.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "webpage=webpage.cli:main",
        ],
    },
    python_requires=">=3.8",
)
