from setuptools import setup, find_packages

setup(
    name='togglPy',
    version='0.1.0',
    description='A CLI tool for summarizing Toggl Track time entries by day, month, project and tag.',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
        'requests',
        'tabulate',
        'python-dotenv',
        'markdown',
        'python-dateutil',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'togglpy=togglpy.__main__:main',
        ],
    },
    python_requires='>=3.8',
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
    ],
)
