from setuptools import setup, find_packages

setup(
    name='CityRollup',
    version='0.1',
    packages=find_packages(include=["rollup", "rollup.*", "city", "city.*", "api", "api.*", "utils", "utils.*"]),
    install_requires=[
        "numpy",
        "requests",
        "fastapi",
        "pydantic",
        "uvicorn",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
    # entry_points={
    #     'console_scripts': [
    #         'city-rollup-node=scripts.run_node:main',
    #     ],
    # },
    author='Danyang Chen, Chenyu Li',
    description='City rollup node: per-participant city simulation behind a rollup finish/poll loop',
    # long_description=open('README.md').read(),
    # long_description_content_type='text/markdown',
)
