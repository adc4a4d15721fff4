from setuptools import setup, find_packages

with open("README.md", "r") as f:
    long_description = f.read()

setup(
    name="domaindata",
    version="1.0.0",
    author="Dominick C. Pastore",
    description="Cached Public Suffix List and Root Zone Database for domain "
                "name parsing",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="GPLv3+",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GNU General Public License v3 or later "
        "(GPLv3+)",
        "Topic :: Internet :: Name Service (DNS)",
    ],

    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "requests",
        "tldextract",
        "cachetools>=5",
        "diskcache",
        "importlib_metadata; python_version<'3.10'",
    ],
    python_requires=">=3.8",
    extras_require={
        "curl": ["pycurl"],
        "test": [
            "flake8",
            "pycurl",
            "pytest",
            "pytest-cov",
            "pytest-mock",
        ]
    },
)
