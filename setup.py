""" cpzkp build script for setuptools.

"""

from setuptools import find_packages, setup  # type: ignore

import cpzkp

with open("README.md", "r", encoding="ascii") as file_:
    longdescription = file_.read()

setup(
    name=cpzkp.name,
    version=cpzkp.__version__,
    license=cpzkp.__license__,
    author=cpzkp.__author__,
    author_email=cpzkp.__author_email__,
    description="Chaum-Pedersen zero-knowledge proofs over prime and elliptic curve groups",
    long_description=longdescription,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={"cpzkp": ["data/*.json"]},
    install_requires=["dataclasses-json"],
    extras_require={"tests": ["pytest"]},
    keywords=(
        "zero-knowledge chaum-pedersen sigma-protocol discrete-logarithm "
        "elliptic-curves secp256k1 ed25519"
    ),
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Topic :: Security :: Cryptography",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
