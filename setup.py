from setuptools import setup, find_packages

__version__ = '1.0.0'

requirements = [
    'coloredlogs>=15.0',
    'pymongo>=4.0',
]

setup(
    name='nftregistry',
    version=__version__,
    description='Non-fungible token ownership registry with an admin-gated mint and burn surface.',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=requirements,
    extras_require={
        'test': ['pytest'],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
    python_requires='>=3.8',
    zip_safe=True,
    include_package_data=True,
)
