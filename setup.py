from setuptools import setup, find_packages

setup(
    name="mesh-topology",
    version="0.1.0",
    description="Triangle mesh topology tools: face neighbours, adjacency graphs and vertex welding",
    author="",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["mesh_topology"],
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "trimesh",
        "networkx",
        "scipy",
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "mesh-topology=mesh_topology:main",
        ],
    },
)
