import re
from pathlib import Path
from typing import List

from setuptools import setup, find_packages


def read_requirements(filename: str) -> List[str]:
    """Read a requirements file, skipping blank lines and comments."""
    lines = Path(filename).read_text(encoding="utf-8").splitlines()
    return [line.strip() for line in lines if line.strip() and not line.startswith("#")]


def get_version():
    file = Path("./defect_dashboard/__init__.py")
    return re.search(
        r'^__version__ *= *[\'"]([^\'"]*)[\'"]', file.read_text(encoding="utf-8"), re.M
    )[1]


setup(
    name="defect_dashboard",
    version=get_version(),
    description="Defect counts from Jira for the dashboard charts and tables",
    zip_safe=False,
    python_requires=">=3.10",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=read_requirements("./requirements.txt"),
    extras_require={"test": read_requirements("./requirements-test.txt")},
    entry_points={
        "console_scripts": [
            "defect-dashboard=defect_dashboard.__main__:main",
        ],
    },
)
