from setuptools import setup, find_packages

setup(
    name='corecatalog',
    version='0.1.0',
    description='Generate catalog records for openFPGA cores published as GitHub releases',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    python_requires='>=3.10',
    install_requires=[
        'requests',
        'PyYAML',
        'rich',
        'platformdirs',
    ],
    extras_require={
        'test': [
            'pytest<9',
            'pytest-mock',
        ],
    },
    entry_points={
        'console_scripts': [
            'corecatalog=corecatalog.cli:main',
        ],
    },
)
