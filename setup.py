#!/usr/bin/env python

from setuptools import setup, find_packages

long_description = open("README.rst").read()
install_requires = ['numpy>=1.18.5',
                    'quantities>=0.12.1']
extras_require = {
    'test': ['pytest'],
}

with open("edfdecode/version.py") as fp:
    d = {}
    exec(fp.read(), d)
    edfdecode_version = d['version']

setup(
    name="edfdecode",
    version=edfdecode_version,
    packages=find_packages(),
    install_requires=install_requires,
    extras_require=extras_require,
    description="edfdecode decodes European Data Format (EDF and EDF+) "
                "recordings held in memory into per-channel sample arrays",
    long_description=long_description,
    license="BSD-3-Clause",
    python_requires=">=3.7",
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: BSD License',
        'Natural Language :: English',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Topic :: Scientific/Engineering']
)
