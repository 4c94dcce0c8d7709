"""
Setup script for mastery-engine.

The Adaptive Mastery & Scheduling Engine is the learner-model core of the
education platform. It serves the API layer with:

1. Mastery - Recency-weighted mastery, confidence and trend
2. Scheduling - SM-2 review intervals and adaptive difficulty
3. Gamification - Streaks, leaderboards and badge awards

All operations are pure functions; the calling layer owns persistence.
"""

from setuptools import find_packages, setup

setup(
    name="mastery-engine",
    version="1.0.0",
    description="Adaptive mastery, spaced repetition and gamification engine",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
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
    classifiers=[
        "Development Status :: 4 - Beta",
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
    keywords="learning spaced-repetition mastery education gamification",
)
