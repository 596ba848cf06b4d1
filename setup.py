from pathlib import Path

from setuptools import find_namespace_packages, setup

# Load packages from requirements.txt
BASE_DIR = Path(__file__).parent
with open(Path(BASE_DIR, "requirements.txt")) as file:
    required_packages = [ln.strip() for ln in file.readlines() if ln.strip()]

# Define our package
setup(
    name="LearnStyle",
    version="0.1",
    description="Learning style classification and content adaptation engine for learner contexts",
    python_requires=">=3.10",
    packages=find_namespace_packages(include=["src", "src.*"]),
    package_data={"src.schemas": ["*.json"]},
    install_requires=required_packages,
    extras_require={
        "dev": ["pytest>=7.0"],
    },
)
