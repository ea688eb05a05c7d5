"""
Setup configuration for the XML-to-JSON record transform.

For development use `pip install -e .[dev]`.

For Distributable Package:
- python -m build
    (Creates installable .whl files in dist/ folder)
"""

from setuptools import setup, find_packages
from pathlib import Path

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

# Separate main requirements from development requirements
main_requirements = []
dev_requirements = []

for req in requirements:
    if any(dev_pkg in req for dev_pkg in ["pytest", "black", "flake8", "mypy"]):
        dev_requirements.append(req)
    else:
        main_requirements.append(req)

setup(
    name="xml_transformer",
    version="1.0.0",
    author="XML Transformer Team",
    description="Record transform converting XML payloads into flat JSON-ready maps via path expressions.",
    long_description=Path("README.md").read_text(encoding="utf-8"),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["xml_transformer", "xml_transformer.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.8",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Text Processing :: Markup :: XML",
    ],
    python_requires=">=3.8",
    install_requires=main_requirements,
    extras_require={
        "dev": dev_requirements,
        "test": dev_requirements,
    },
    entry_points={
        "console_scripts": [
            "xml_transformer=xml_transformer.cli:main",
        ],
    },
)
