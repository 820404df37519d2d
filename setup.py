"""Setup configuration for Denycord Discord Bot."""

from setuptools import setup, find_packages

setup(
    name="denycord",
    version="0.0.1",
    description="A Discord bot that deletes messages matching a hot-reloaded regex denylist",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.11",
    install_requires=[
        "py-cord>=2.4",
        "python-dotenv>=1.0",
        "PyYAML>=6.0",
        "prompt_toolkit>=3.0",
        "watchdog>=4.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "denycord=denycord.main:main",
        ],
    },
)
