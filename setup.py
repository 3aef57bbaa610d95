from setuptools import setup, find_packages

setup(
    name='sdfsplice',
    version='0.1.0',
    description='Compile SDF scene graphs into GLSL fragment shader templates.',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=['tests', 'tests.*', 'examples']),
    include_package_data=True,
    package_data={
        'sdfsplice': ['glsl/*.frag'],
    },
    install_requires=[
        'numpy',
        'watchdog',
    ],
    extras_require={
        'test': [
            'pytest',
        ]
    },
    entry_points={
        'console_scripts': [
            'sdfsplice=sdfsplice.cli:main',
        ],
    },
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Topic :: Multimedia :: Graphics :: 3D Rendering',
        'Topic :: Software Development :: Compilers',
    ],
    python_requires='>=3.7',
)
