from setuptools import setup
short_desc = "A program for simulating multi-layer quasi-geostrophic turbulence"
setup(
  name = 'multilayerqg',
  version = '0.1',
  description = short_desc,
  packages = ['multilayerqg'],
  python_requires = '>=3.8',
  install_requires = ['numpy', 'pyfftw'],
  extras_require = {'test': ['pytest']},
)
