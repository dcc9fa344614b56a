"""Setup script for the daypicker selection engine."""

from pathlib import Path

from setuptools import find_packages, setup

HERE = Path(__file__).parent


def _read_requirements(path: Path) -> tuple[list[str], list[str]]:
    """Split requirements.txt into runtime and test-only (pytest*) entries."""
    runtime: list[str] = []
    testing: list[str] = []
    if not path.exists():
        return runtime, testing
    for raw in path.read_text(encoding="utf-8").splitlines():
        entry = raw.split("#", 1)[0].strip()
        if not entry:
            continue
        (testing if entry.lower().startswith("pytest") else runtime).append(entry)
    return runtime, testing


readme = HERE / "README.md"
install_requires, test_requires = _read_requirements(HERE / "requirements.txt")

setup(
    name="daypicker",
    version="0.1.0",
    description="Selection engine for single-date and date-range calendar pickers",
    long_description=readme.read_text(encoding="utf-8") if readme.exists() else "",
    long_description_content_type="text/markdown",
    author="daypicker developers",
    packages=find_packages(include=["daypicker", "daypicker.*"]),
    install_requires=install_requires,
    extras_require={
        "test": test_requires,
        "dev": [*test_requires, "black>=23.0.0", "isort>=5.12.0", "mypy>=1.0.0"],
    },
    python_requires=">=3.11",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Libraries",
        "Topic :: Office/Business :: Scheduling",
    ],
    keywords="calendar date-picker date-range selection",
    entry_points={
        "console_scripts": [
            "daypicker=daypicker.__main__:main",
        ],
    },
    zip_safe=False,
)
