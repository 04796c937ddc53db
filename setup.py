from pathlib import Path
from setuptools import setup, find_packages


def read_readme() -> str:
    readme_path = Path(__file__).resolve().parent / "README.md"
    return readme_path.read_text(encoding="utf-8") if readme_path.exists() else ""


setup(
    name="filecrypt",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "cryptography>=41.0.0",
        "colorama>=0.4.6",
    ],
    extras_require={
        "test": [
            "numpy>=1.24.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "file_encrypt=filecrypt.main:main",
        ],
    },
    python_requires=">=3.10",
    description="Encrypt or decrypt a file with a password-derived AES-256 key",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
)
