from pathlib import Path

from setuptools import find_packages, setup

# Load packages from requirements.txt
BASE_DIR = Path(__file__).parent
with open(Path(BASE_DIR, "requirements.txt")) as file:
    required_packages = [ln.strip() for ln in file.readlines() if ln.strip()]

# Define our package
setup(
    name="tierquiz",
    version="0.1.0",
    description="Adaptive multiple-choice quiz core with tiered difficulty promotion",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={"tierquiz": ["schemas/*.schema.json"]},
    include_package_data=True,
    install_requires=required_packages,
    extras_require={
        "dev": ["pytest>=7.0"],
    },
)
