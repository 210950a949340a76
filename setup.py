import setuptools
from setuptools import setup

import FREEBODY


#### Get/Set info to be passed into setup() ####
with open("README.md", "r") as fh:
    long_description = fh.read()

with open("requirements.txt") as reqFile:
    install_reqs = [ line.strip() for line in reqFile.readlines() if line.strip() != "" and not line.startswith("#") ]

setup(
    name='FREEBODY',
    version=FREEBODY.__version__,
    description="A compact rigid body dynamics simulator: quaternion/spatial vector algebra, Newton-Euler solvers and Runge-Kutta time stepping",
    install_requires=install_reqs,
    license='MIT',
    long_description = long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=[ "test", "test.*", ]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Intended Audience :: Developers",
        "Natural Language :: English",
        "Topic :: Scientific/Engineering :: Physics",
    ],
    package_data={ "FREEBODY": [ "Examples/Simulations/*.freebody" ] },
    include_package_data=True,
    extras_require={ "test": [ "pytest" ] },

    python_requires='>=3.7',

    zip_safe=False,

    entry_points={
        'console_scripts': [
            'freebody = FREEBODY.Main:main' ]
    }
)
