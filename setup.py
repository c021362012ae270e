from setuptools import setup, find_packages


setup(
    name="mizpatch",
    version="0.1",
    packages=find_packages(include=["mizpatch", "mizpatch.*"]),
    description="Scoped find/replace inside the requiredModules block of DCS .miz mission archives.",
    author="vercingetorx",
    python_requires=">=3.8",
    install_requires=[],
    entry_points={
        "console_scripts": [
            "mizpatch=mizpatch.cli:main",
        ]
    },
)
