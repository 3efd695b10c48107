"""
Setup script for kanadrill.

kanadrill is the adaptive core of a kana/kanji drill app plus a small
terminal front end:

1. Adaptive selection - weighted draws that favour characters answered wrong
2. Mastery tracking - 90%+ accuracy over 10+ attempts per character
3. Smart reverse mode - flips question direction after a streak of correct answers

The 'kanadrill' command is the entry point.
"""

from setuptools import find_packages, setup

setup(
    name="kanadrill",
    version="0.3.0",
    description="Adaptive kana drill core: weighted selection, mastery and reverse mode",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(include=["kanadrill", "kanadrill.*"]),
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "kanadrill=kanadrill.cli.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Computer Aided Instruction (CAI)",
    ],
    keywords="learning japanese kana flashcards adaptive cli education",
)
