# setup.py
from setuptools import setup, find_packages

setup(
    name="tidyeval",
    version="0.1.0",
    description="Tidy evaluation: quosures, overscoped data and self-evaluating quoted expressions",
    packages=find_packages(include=["tidyeval", "tidyeval.*"]),
    python_requires=">=3.10",
    install_requires=["numpy"],
    extras_require={"test": ["pytest"]},
    zip_safe=False,
)
