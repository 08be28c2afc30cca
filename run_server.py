"""
描述: Baklib MCP Server 启动脚本
主要功能:
    - 从仓库根目录直接运行, 无需安装
    - 传输方式由 MCP_TRANSPORT 决定 (stdio / http)
"""

import os
import sys

# 添加项目路径
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from baklib_mcp.main import main

if __name__ == "__main__":
    main()
