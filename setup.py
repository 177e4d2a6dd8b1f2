import pathlib
import setuptools


HERE = pathlib.Path(__file__).parent

README = (HERE/'README.md').read_text()

setuptools.setup(
    name='ladok_synchronizer',
    version='1.0',
    description='A client that reports grades from Canvas to Ladok.',
    long_description=README,
    long_description_content_type='text/markdown',
    license='MIT',
    classifiers=[
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python'
    ],
    packages=setuptools.find_packages(exclude=['test', 'test.*']),
    install_requires=['requests'],
    extras_require={'test': ['responses']},
    python_requires=">=3.8"
)
