"""Setup script for the ad_variants_studio package."""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="ad_variants_studio",
    version="0.1.0",
    description="Multi-tenant studio for SVG ad templates and AI-generated ad variants",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["alembic", "alembic.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Framework :: FastAPI",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.4"],
    },
    entry_points={
        "console_scripts": [
            "studio-server=studio.__main__:main",
            "studio-seed=studio.seed:main",
        ],
    },
)
