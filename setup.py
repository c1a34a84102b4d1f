import os
from setuptools import setup, find_packages


WORKING_DIR = os.path.dirname(os.path.realpath(__file__))
with open(os.path.join(WORKING_DIR, 'requirements.txt')) as reqs:
  REQUIREMENTS = [ req.strip() for req in reqs if req.strip() ]

setup(
    name='simplesyslog',
    version='0.1.0',
    description='Send syslog messages over UDP, TCP or TLS',
    package_dir={'': 'libs'},
    packages=find_packages('libs', include=('simplesyslog',)),
    python_requires='>=3.7',
    install_requires = REQUIREMENTS
    )
