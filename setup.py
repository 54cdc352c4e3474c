#!/usr/bin/env python

"""Setup file and install script for the BQSR before/after comparison pipeline"""

import os
import subprocess

import setuptools

VERSION = '0.1.0'

# add version number and git commit hash of the current revision to version.py
try:
    git_run = subprocess.run(['git', 'rev-parse', '--short', 'HEAD'], stdout=subprocess.PIPE,
                             stderr=subprocess.DEVNULL)
    git_run.check_returncode()
except (OSError, subprocess.SubprocessError):
    commit_hash = ''
else:
    commit_hash = git_run.stdout.strip().decode()

here = os.path.dirname(os.path.abspath(__file__))
with open(os.path.join(here, 'bqsrqc', 'pipeline', 'version.py'), 'w') as version_file:
    version_file.writelines([f'__version__ = "{VERSION}"\n',
                             f'__git_revision__ = "{commit_hash}"\n'])

# GATK itself is installed separately, via Conda or environment modules
setuptools.setup(
    name='bqsr-qc',
    version=VERSION,
    description='Before and after comparison of GATK base quality score recalibration',
    long_description=open(os.path.join(here, 'README.md')).read(),
    long_description_content_type='text/markdown',
    packages=setuptools.find_packages(exclude=['tests', 'tests.*']),
    scripts=['scripts/bqsr_qc.py'],
    python_requires='>=3.6',
    install_requires=['logbook', 'PyYAML', 'toolz'],
    extras_require={'test': ['pytest', 'pytest-mock', 'mock']},
    classifiers=[
        'Programming Language :: Python :: 3',
        'Environment :: Console',
        'Intended Audience :: Science/Research',
        'Topic :: Scientific/Engineering :: Bio-Informatics',
    ],
)
