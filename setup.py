from setuptools import setup, find_packages

# Function to read the contents of the requirements file
def read_requirements():
    with open('requirements.txt') as req:
        return req.read().splitlines()

setup(
    name='seedconn',
    version='1.0.0',
    description='Voxel-wise seed connectivity maps from region and node time series',
    packages=find_packages(include=['seedconn', 'seedconn.*']),
    install_requires=read_requirements(),
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'seedconn = seedconn.__main__:main',
        ]},
)
