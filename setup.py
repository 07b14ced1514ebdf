# setup.py
from setuptools import setup, find_packages

setup(
    name="zkmirror",
    version="0.3.0",
    description="Mirror a ZooKeeper tree onto the filesystem and restore it back",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "kazoo>=2.9",
        "requests>=2.31",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    entry_points={
        'console_scripts': [
            'zkmirror=zkmirror.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
