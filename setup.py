from setuptools import find_packages, setup

setup(
    name="password-security",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "requests>=2.25",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "password-security=password_security.cli:main",
        ],
    },
    author="Param",
    author_email="technicalparam@outlook.com",
    description="Password breach check (k-anonymity), strength scoring, policy validation and generation",
    license="MIT",
)
