from setuptools import setup, find_packages
import sys, os

here = os.path.abspath(os.path.dirname(__file__))
README = open(os.path.join(here, 'README.md')).read()
NEWS = open(os.path.join(here, 'NEWS.txt')).read()


version = '0.1.0'

install_requires = [
    'amaranth>=0.5,<0.6',
]

test_requires = [
    'pytest',
]

setup(
    name='pipelined-cordic',
    version=version,
    description="A fully pipelined fixed-point CORDIC engine in amaranth HDL",
    long_description=README + '\n\n' + NEWS,
    long_description_content_type='text/markdown',
    classifiers=[
        "Topic :: Software Development :: Libraries",
        "Topic :: System :: Hardware",
        "License :: OSI Approved :: GNU Lesser General Public License v3 or later (LGPLv3+)",
        "Programming Language :: Python :: 3",
    ],
    keywords='amaranth nmigen cordic hdl',
    license='LGPLv3+',
    python_requires='>=3.8',
    packages=find_packages('src'),
    package_dir = {'': 'src'},
    include_package_data=True,
    zip_safe=False,
    install_requires=install_requires,
    extras_require={'test': test_requires},
    entry_points={
        'console_scripts': [
            'cordicpipe-rtlil = cordicpipe.engine:main',
        ],
    },
)
