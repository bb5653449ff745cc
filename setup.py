from setuptools import setup, find_packages

setup(
    name="pitchseg",
    version="1.0.0",
    description="Foreground/background segmentation of players and ball against the pitch",
    author="NovaVista",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "opencv-python>=4.8.0",
        "numpy>=1.24.0",
        "scipy>=1.10.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.9",
)
