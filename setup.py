"""
Setup script for Trailmark
Run: pip install -e .   then: trailmark
"""

from setuptools import find_namespace_packages, setup

setup(
    name='trailmark',
    version='1.0.0',
    description='Map-based running and cycling activity logger',
    python_requires='>=3.8',
    py_modules=['app', 'constants', 'state'],
    packages=find_namespace_packages(include=['core', 'components']),
    install_requires=[
        'nicegui',
        'pandas',
    ],
    extras_require={
        'test': ['pytest>=7'],
    },
    entry_points={
        'console_scripts': ['trailmark=app:main'],
    },
)
