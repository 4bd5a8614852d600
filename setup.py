#!python

import os.path

from setuptools import find_packages, setup

here = os.path.abspath(os.path.dirname(__file__))

# Read the version without importing the package and its dependencies
about = {}
with open(os.path.join(here, "src", "levmatch", "version.py")) as f:
    exec(f.read(), about)


if __name__ == "__main__":
    setup(
        name="Levmatch",
        version=about["versionstring"](),
        package_dir={"": "src"},
        packages=find_packages("src"),
        description="Find dictionary words within a Levenshtein distance using compact automata.",
        long_description=open(os.path.join(here, "README.md")).read(),
        long_description_content_type="text/markdown",
        license="Two-clause BSD license",
        keywords="levenshtein automaton fuzzy spell",
        zip_safe=True,
        python_requires=">=3.8",
        install_requires=[
            "cached-property>=1.5.2",
            "loguru>=0.7.2",
        ],
        extras_require={
            "test": [
                "pytest>=8.3.2",
            ],
        },
        entry_points={
            "console_scripts": [
                "levmatch = levmatch.cli:main",
            ],
        },
        classifiers=[
            "Programming Language :: Python :: 3",
            "Development Status :: 5 - Production/Stable",
            "Intended Audience :: Developers",
            "License :: OSI Approved :: BSD License",
            "Natural Language :: English",
            "Operating System :: OS Independent",
            "Programming Language :: Python :: 3.8",
            "Programming Language :: Python :: 3.9",
            "Programming Language :: Python :: 3.10",
            "Programming Language :: Python :: 3.11",
            "Programming Language :: Python :: 3.12",
            "Topic :: Software Development :: Libraries :: Python Modules",
            "Topic :: Text Processing :: Linguistic",
        ],
    )
