from setuptools import setup, find_namespace_packages

setup(name='plotgrade',
      version="0.1.0",
      description='Inspect plotnine plots for automated grading',
      long_description='',
      author='Paul',
      author_email='paulxiep@outlook.com',
      url='',
      packages=find_namespace_packages(include=['plotgrade', 'plotgrade.*']),
      python_requires='>=3.10',
      install_requires=[
          "plotnine>=0.12",
      ],
      extras_require={
          "test": ["pytest", "pandas"],
      },
      license='Private',
      zip_safe=False,
      keywords='',
      classifiers=[''])
