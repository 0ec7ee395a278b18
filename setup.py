"""
Setup script for the GZIP compressibility scanner.

Installs the ``Compressibility`` package and the ``gzip_compressibility``
command-line module.

Usage:
    pip install -e .
    pip install -e ".[test]"

After installation the scanner is available as ``gzip-compressibility``.
"""

from setuptools import setup, find_packages

setup(
    name='gzip-compressibility',
    version='0.1.1',
    description='GZIP compressibility of fixed-length genomic windows from FASTA files',
    packages=find_packages(include=['Compressibility', 'Compressibility.*']),
    py_modules=['gzip_compressibility'],
    python_requires='>=3.8',
    install_requires=[
        'numpy',
        'pandas',
        'matplotlib',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'gzip-compressibility=gzip_compressibility:main',
        ],
    },
    zip_safe=False,
)
