"""Setup script for YouTube Channel Playlist Sync."""

from setuptools import setup, find_namespace_packages

setup(
    name="playlistsync",
    version="0.1.0",
    description="Keep a YouTube playlist in sync with a channel's uploads",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src"),
    python_requires=">=3.8",
    install_requires=[
        "google-api-python-client>=2.0.0",
        "google-auth>=2.0.0",
        "google-auth-oauthlib>=0.4.0",
        "python-dotenv>=0.19.0",
        "fastapi>=0.95.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-mock>=3.10.0",
            "httpx>=0.23.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "playlistsync=playlistsync.cli:main",
        ]
    },
)
