# setup.py
from setuptools import setup, find_packages

setup(
    name='navtemplate',
    version='0.1.0',
    description='Bottom-menu navigation widgets with identity-preserving widget erasure, shared defaults and a desktop preview.',
    long_description=open('README.md', encoding='utf-8').read(),
    long_description_content_type='text/markdown',

    # Finds the `navtemplate` and `navtemplate_cli` packages
    packages=find_packages(include=['navtemplate', 'navtemplate.*', 'navtemplate_cli', 'navtemplate_cli.*']),
    include_package_data=True,

    install_requires=[
        'PySide6',
        'typer',
        'PyYAML',
    ],
    extras_require={
        'test': ['pytest'],
    },

    # Creates an executable script named `navtemplate` that calls the `app`
    # object inside `navtemplate_cli.main`.
    entry_points={
        'console_scripts': [
            'navtemplate = navtemplate_cli.main:app',
        ],
    },

    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: User Interfaces',
    ],
    python_requires='>=3.10',
)
