"""Setup script for YouTube Account Migrator."""

from setuptools import setup, find_namespace_packages

setup(
    name="ytmigrate",
    version="0.1.0",
    description="Copy or delete YouTube account data between two accounts",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src"),
    install_requires=[
        "google-api-python-client>=2.0.0",
        "google-auth>=2.0.0",
        "google-auth-httplib2>=0.1.0",
        "google-auth-oauthlib>=0.4.0",
        "httplib2>=0.19.0",
        "python-dotenv>=0.19.0",
        "tqdm>=4.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "ytmigrate=ytmigrate.cli:main",
        ]
    },
)
