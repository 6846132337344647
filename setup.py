# -*- coding: utf-8 -*-

# Copyright (c) 2016-2025 by University of Kassel and Fraunhofer Institute for Energy Economics
# and Energy System Technology (IEE), Kassel. All rights reserved.

from setuptools import setup, find_packages

with open('README.rst', 'rb') as f:
    install = f.read().decode('utf-8')

with open('CHANGELOG.rst', 'rb') as f:
    changelog = f.read().decode('utf-8')

classifiers = [
    'Development Status :: 4 - Beta',
    'Intended Audience :: Developers',
    'Intended Audience :: Education',
    'Intended Audience :: Science/Research',
    'License :: OSI Approved :: BSD License',
    'Natural Language :: English',
    'Operating System :: OS Independent',
    'Programming Language :: Python',
    'Programming Language :: Python :: 3',
    'Topic :: Scientific/Engineering :: Mathematics']

long_description = '\n\n'.join((install, changelog))

setup(
    name='flowhess',
    version='0.1.0',
    description='Exact Hessians of AC branch flow limit constraints for optimal power flow.',
    long_description=long_description,
    long_description_content_type='text/x-rst',
    license='BSD',
    python_requires='>=3.8',
    install_requires=["numpy",
                      "scipy"],
    extras_require={
        "test": ["pytest", "pytest-xdist"]},
    packages=find_packages(include=["flowhess", "flowhess.*"]),
    include_package_data=True,
    classifiers=classifiers
)
