"""
Setup script for mathsprint-core.

mathsprint is the adaptive-practice engine behind a mental-arithmetic
trainer. It serves three roles:

1. Scorer - Fluency score and XP award for a finished session
2. Generator - Endlessly scaling rounding / doubling / halving questions
3. Detector - Weakest untaught strategy plus its remedial lesson

The 'mathsprint' command is a small inspection CLI around the engine.
"""

from setuptools import find_packages, setup

setup(
    name="mathsprint-core",
    version="1.0.0",
    description="Adaptive-practice engine for mental arithmetic: fluency scoring, tiered drills, weakness detection",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="mathsprint",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
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
            "mathsprint=mathsprint.cli:run",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Computer Aided Instruction (CAI)",
    ],
    keywords="mental-math arithmetic fluency adaptive-practice education",
)
