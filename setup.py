import re
from setuptools import setup


def find_version(filename):
    _version_re = re.compile(r"__version__ = ['\"](.*)['\"]")
    last = None  # match python semantics
    for line in open(filename):
        version_match = _version_re.match(line)
        if version_match:
            last = version_match.group(1)

    return last


__version__ = find_version('sxstream/sexp.py')

with open('README.org', 'rt') as f:
    long_description = f.read()

cli_requires = ['clifn']
fuzz_requires = ['python-afl'] + cli_requires
tests_require = ['pytest'] + cli_requires

setup(name='sxstream',
      version=__version__,
      description='A cursor byte stream and an s-expression parser.',
      long_description=long_description,
      long_description_content_type='text/plain',  # FIXME org -> markdown
      license='MIT',
      classifiers=[
          'Development Status :: 3 - Alpha',
          'License :: OSI Approved :: MIT License',
          'Programming Language :: Python :: 3.8',
          'Programming Language :: Python :: 3.9',
          'Programming Language :: Python :: 3.10',
          'Programming Language :: Python :: 3.11',
          'Programming Language :: Python :: 3.12',
          'Programming Language :: Python :: Implementation :: CPython',
          'Programming Language :: Python :: Implementation :: PyPy',
          'Operating System :: POSIX :: Linux',
          'Operating System :: MacOS :: MacOS X',
          'Operating System :: Microsoft :: Windows',
      ],
      keywords='sexp s-expression parser parsing stream cursor utf-8 binary',
      packages=[
          'sxstream',
      ],
      python_requires='>=3.8',
      tests_require=tests_require,
      extras_require={'test': tests_require,
                      'cli': cli_requires,
                      'fuzz': fuzz_requires,
                     },
      entry_points={'console_scripts': ['sxstream=sxstream.cli:main']},
     )
