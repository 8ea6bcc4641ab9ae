import re

import setuptools

with open('fuzztrie/_version.py') as f:
    version = re.search(r"__version__ = '([^']+)'", f.read()).group(1)

setuptools.setup(
    name='fuzztrie',
    version=version,
    author='fuzztrie contributors',
    packages=['fuzztrie'],
    python_requires='>=3.8.0',
    install_requires=['sortedcontainers'],
    extras_require={
        'test': ['pytest', 'numpy'],
    },
    include_package_data=True,
    data_files=[
        ('', ['README.md', 'CHANGELOG.md']),
    ],
)
