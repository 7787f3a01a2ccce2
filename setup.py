from setuptools import setup, find_packages

setup(
    name="sphere-pathtracer",
    version="1.0.0",
    description="Progressive Monte Carlo Path Tracer for Sphere Scenes",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy>=1.21.0",
        "matplotlib>=3.5.0",
        "opencv-python>=4.5.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "pathtracer=pathtracer.main:main",
        ],
    },
    python_requires=">=3.8",
)
