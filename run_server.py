#!/usr/bin/env python
"""
3D三目並べ 開発サーバ起動スクリプト
"""

import os
import sys

# プロジェクトルートをパスに追加
project_root = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, project_root)

from src.api.main import app, HOST, PORT
import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("3D三目並べ 開発サーバを起動します")
    print("=" * 60)
    print(f"APIサーバ: http://{HOST}:{PORT}")
    print(f"API ドキュメント: http://{HOST}:{PORT}/docs")
    print("=" * 60)
    print()

    uvicorn.run(
        app,
        host=HOST,
        port=PORT,
        reload=False,
        log_level="info"
    )
