#!/usr/bin/env python
# -*- coding: utf-8 -*-

from setuptools import setup

setup(name='lvm-bootstrap',
		version='0.1',
		description='LVM volume provisioning and bootloader setup for unattended installations',
		author='Johann Schmitz',
		author_email='johann@j-schmitz.net',
		packages=['lvmbootstrap', 'lvmbootstrap.actions', 'lvmbootstrap.bootloader', 'lvmbootstrap.config',
				'lvmbootstrap.storage'],
		package_dir={'': 'src'},
		python_requires='>=3.6',
		install_requires=['sh'],
		extras_require={
			'test': ['pytest'],
		},
		entry_points={
			'console_scripts': [
				'lvm-bootstrap=lvmbootstrap.main:main',
			],
		},
)
