import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="pyqty",
    version="0.1.0",
    author="The pyqty developers",
    description="Dimensionally safe physical quantities and units.",
    include_package_data=True,  # <<< Note!
    install_requires=[
        'numpy'
    ],
    extras_require={
        'test': ['pytest']
    },
    keywords='physical quantities units dimensions conversion',
    long_description=long_description,
    long_description_content_type="text/markdown",
    setup_requires=["numpy"],
    packages=setuptools.find_packages(include=['pyqty', 'pyqty.*']),
    python_requires='>=3.10',
    classifiers=[
        "Development Status :: 2 - Pre-Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.10",
        "Topic :: Scientific/Engineering :: Physics"
    ]
)
