from setuptools import setup, find_packages


setup(
    name="aont",
    version="0.1",
    packages=find_packages(include=["aont", "aont.*"]),
    description="Rivest's package transform: an all-or-nothing transform over digest-sized blocks.",
    author="vercingetorx",
    install_requires=[
        "pycryptodomex>=3.23.0",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
)
