from setuptools import setup, find_packages

setup(
    name="scpn-superconductors",
    version="1.0.0",
    license="AGPL-3.0-or-later",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "click>=8.1",
        "numpy",
        "matplotlib",
        "scipy",
        "pydantic>=2.0",
        "pandas>=1.5",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "hypothesis>=6.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "scpn-supercon=scpn_superconductors.cli:main",
        ],
    },
)
