from pathlib import Path

from setuptools import find_packages, setup

version = (Path(__file__).parent / "fakexhr/VERSION").read_text("ascii").strip()


install_requires = [
    "Twisted>=21.7.0",
    "w3lib>=1.17.0",
    "lxml>=4.6.0",
]
extras_require = {
    ':platform_python_implementation == "CPython"': ["PyDispatcher>=2.0.5"],
    ':platform_python_implementation == "PyPy"': ["PyPyDispatcher>=2.1.0"],
    "test": ["pytest", "testfixtures<12"],
}


setup(
    name="fakexhr",
    version=version,
    description="A controllable fake XMLHttpRequest for tests and request routing harnesses",
    long_description=open("README.rst", encoding="utf-8").read(),
    license="BSD",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"fakexhr": ["VERSION"]},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Internet :: WWW/HTTP",
        "Topic :: Software Development :: Testing",
    ],
    python_requires=">=3.9",
    install_requires=install_requires,
    extras_require=extras_require,
)
