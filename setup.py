from setuptools import setup

setup(
	name='capsremap',
	version='0.1.0',
	description='Remaps Caps Lock while the macOS session is unlocked',
	packages=['capsremap', 'capsremap.modules'],
	package_dir={'':'src'},
	python_requires='>=3.10',
	install_requires=[
		'pyobjc-framework-Cocoa; sys_platform == "darwin"',
	],
	extras_require={
		'test': [
			'pytest',
		],
	},
	entry_points={
		'console_scripts': [
			'capsremap=capsremap:main',
		]
	}
)
