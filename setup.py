"""
Order Analytics - Setup Configuration
"""
from setuptools import setup, find_packages
from pathlib import Path

# Read README
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text()

setup(
    name="order-analytics",
    version="1.0.0",
    description="Spending analytics for Amazon order history exports",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["order_analytics", "order_analytics.*"]),
    python_requires=">=3.10",
    install_requires=[
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.3",
            "pytest-cov>=4.1.0",
            "pandas>=2.1.4",
            "black>=23.12.1",
            "flake8>=7.0.0",
            "mypy>=1.8.0",
        ],
        "ui": [
            "streamlit>=1.29.0",
            "pandas>=2.1.4",
            "plotly>=5.18.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "order-analytics=order_analytics.cli.analyze:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Office/Business :: Financial",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
