from setuptools import setup, find_packages
import re
from pathlib import Path


def read_readme():
    this_directory = Path(__file__).parent
    readme_file = this_directory / 'README.md'
    if readme_file.exists():
        return readme_file.read_text(encoding='utf-8')
    return ""

def get_version():
    init_file = Path(__file__).parent / 'podrun' / '__init__.py'
    if init_file.exists():
        content = init_file.read_text()
        match = re.search(r'__version__\s*=\s*["\']([^"\']+)["\']', content)
        if match:
            return match.group(1)
    return "0.1.0"


setup(
    name="podrun",
    version=get_version(),
    description="Run a local script in an ephemeral Kubernetes pod and collect its output.",
    long_description=read_readme(),
    long_description_content_type='text/markdown',
    packages=find_packages(include=['podrun', 'podrun.*']),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "kubernetes>=29.0.0",
        "pydantic>=2.5",
        "typer>=0.9",
        "PyYAML>=6.0",
        "urllib3>=1.26",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Distributed Computing",
    ],
    keywords="kubernetes pod script runner",
    entry_points={
        'console_scripts': [
            'podrun=podrun.cli:cli_app',
        ],
    },
)
