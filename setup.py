"""
3D三目並べプロジェクトのセットアップスクリプト
"""

from setuptools import setup, find_packages

setup(
    name="tictactoe3d",
    version="1.0.0",
    description="3D三目並べ - 駒の寿命・凍結・強化捕獲・パワーカード付きのルールエンジン",
    author="",
    packages=find_packages(include=["src", "src.*"]),
    package_dir={"": "."},
    python_requires=">=3.9",
    install_requires=[
        "fastapi>=0.118.0",
        "uvicorn>=0.37.0",
        "pydantic>=2.11.10",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "hypothesis>=6.0.0",
            "httpx>=0.24.0",
        ],
    },
)
