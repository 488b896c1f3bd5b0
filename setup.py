from setuptools import setup, find_packages

setup(
    name="yt-play",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*", "features", "features.*"]),
    include_package_data=True,
    install_requires=[
        "typer",
        "rich",
        "pymonad>=2.4.0",
        "toolz",
        "yt-dlp",
        "PyYAML",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-mock",
            "behave",
            "ruff",
            "setuptools",
            "wheel",
            "twine",
        ]
    },
    entry_points={
        "console_scripts": [
            "yt-play = yt_play.cli:app",
        ],
    },
    description="Play YouTube playlists from a local audio cache kept in sync with yt-dlp.",
    long_description=open("README.adoc").read(),
    long_description_content_type="text/asciidoc",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Multimedia :: Sound/Audio :: Players",
        "Topic :: Internet :: WWW/HTTP",
    ],
    python_requires=">=3.8",
)
