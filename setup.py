"""Setup configuration for bigmodexp."""

from setuptools import find_packages, setup

setup(
    name="bigmodexp",
    version="0.1.0",
    description=(
        "Deterministic, cost-bounded big-integer modular exponentiation "
        "behind a status-code syscall boundary for metered virtual machines"
    ),
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="bigmodexp Contributors",
    license="MIT",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.24",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Security :: Cryptography",
        "Topic :: Scientific/Engineering :: Mathematics",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
