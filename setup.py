from setuptools import setup
from pathlib import Path

root_dir = Path(__file__).parent # poredft root directory
readme = (root_dir / 'README.md').read_text()

setup(name='poredft'
	,version='v0.1.0'
	,description='Classical Density Functional Theory for fluids in pores and at planar interfaces'
	,long_description=readme
	,long_description_content_type='text/markdown'
	,author='Vegard Gjeldvik Jervell'
	,author_email='vegard.g.jervell@ntnu.no'
	,url='https://github.com/thermotools/surfpack'
	,packages=['poredft']
	,python_requires='>=3.8'
    ,install_requires=['numpy>=1.22',
                       'scipy>=1.7',
                       'thermopack>=2.2',
                       'matplotlib>=3.5']
	,extras_require={'test': ['pytest>=7']}
	)
