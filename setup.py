import setuptools

setuptools.setup(
    name="dicedist",
    version="0.1.0",
    classifiers=["Programming Language :: Python :: 3"],
    packages=setuptools.find_packages(include=["dicedist", "dicedist.*"]),
    package_data={"dicedist": ["roll.lark", "settings.default.yaml"]},
    python_requires=">=3.8",
    entry_points={"console_scripts": ["dicedist=dicedist.__main__:app"]},
    install_requires=["lark", "pyyaml", "plotly", "kaleido", "pandas", "typer", "rich"],
    extras_require={"test": ["pytest"]},
)
