#!/usr/bin/env python
"""RouterOS API client"""

import re
from setuptools import setup, find_packages

_version_re = re.compile(r"__version__\s=\s'(.*)'")

def main():
	"""RouterOS API client"""

	with open('README.rst') as read_me:
		long_description = read_me.read()

	with open('ros_client/__init__.py', 'r') as f:
		version = _version_re.search(f.read()).group(1)

	setup(
		name='ros-client',
		version=version,
		description='A simple blocking client for the MikroTik RouterOS API protocol in Python',
		long_description=long_description,
		license='BSD 3',
		packages=find_packages(exclude=['tests', 'tests.*']),
		include_package_data=True,
		python_requires='>=3.7',
		install_requires=[],
		extras_require={
			'test': ['pytest'],
		},
		keywords='RouterOS, MikroTik, API',
		entry_points={
			'console_scripts': [
				'ros_client=ros_client.__main__:main',
			]
		},
		classifiers=[
			'Development Status :: 4 - Beta',
			'Intended Audience :: Developers',
			'Topic :: Software Development :: Libraries :: Python Modules',
			'Topic :: System :: Networking',
			'License :: OSI Approved :: BSD License',
			'Programming Language :: Python :: 3',
		]
	)

if __name__ == '__main__':
	main()
