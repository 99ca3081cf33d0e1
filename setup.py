from setuptools import setup, find_packages

setup(
    name='apset-planner',
    version='1.0.0',
    description='Vibration AP Set planner: Fmax, LOR, PeakVue filters and trend recommendations.',
    author='Your Name',
    packages=find_packages(exclude=['tests']),
    py_modules=['main'],
    install_requires=[
        'numpy==2.2.4',
        'pandas==2.2.3',
        'pyinstaller==6.13.0',
        'pyqtgraph==0.13.7',
        'PySide6==6.9.0',
    ],
    entry_points={
        'gui_scripts': [
            'apset-planner = main:main'
        ]
    },
    package_data={
        'data': ['_assets/*.json'],
    },
    include_package_data=True,
    zip_safe=False
)
