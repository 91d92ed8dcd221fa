"""
3D三目並べ パッケージルート
"""
