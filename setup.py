from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="countryidentity",
    version="0.0.1",
    author="Peter Cotton",
    author_email="",
    description="Country identifier resolution and conversion",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/petercotton/countryidentity",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={
        'countryidentity.countries.data': ['*.json'],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=[
        "pandas>=1.3.0",
        "babel>=2.9.0",
    ],
    extras_require={
        "build": [
            "pycountry>=22.0.0",
            "country_converter>=1.0.0",
            "phonenumbers>=8.12.0",
        ],
        "dev": ["pytest>=7.0.0"],
    },
)
