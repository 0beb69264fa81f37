# make sure every file can run on any computers, avoid absolute paths and undownloaded packages

#pip install setuptools first if not installed
from setuptools import setup, find_packages
import os


# Read requirements
def read_requirements():
    req_file = os.path.join(os.path.dirname(__file__), 'requirements.txt')
    if os.path.exists(req_file):
        with open(req_file) as f:
            return [line.strip() for line in f if line.strip() and not line.startswith('#')]
    return [
        "pyyaml",
        "numpy",
        "scipy",
        "matplotlib",
        "smbus2",
    ]

setup(
    name="mpu6050_attitude",
    version="0.1.0",
    description="Kalman and complementary roll/pitch estimation for the MPU6050",
    packages=find_packages(include=[
        'attitude_estimation',
        'attitude_estimation.*',
        'hardware',
        'hardware.*',
        'simulation',
        'simulation.*',
        'debug',
        'debug.*',
    ]),
    py_modules=['run_attitude', 'run_simulation'],
    python_requires=">=3.8",
    install_requires=read_requirements(),
    extras_require={
        'test': ['pytest'],
    },
    package_data={
        '': ['*.yaml', '*.yml'],
    },
    include_package_data=True,
)
