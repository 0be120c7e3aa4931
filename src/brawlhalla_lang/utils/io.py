"""
文件 I/O 工具函数

提供导出所需的文件读写功能：
- 编码名称解析（支持 "locale" 表示系统默认编码）
- 字节写入（可选原子写入）
"""

from __future__ import annotations

import locale
import os
import tempfile
import logging
from pathlib import Path

# 获取模块级 logger
logger = logging.getLogger(__name__)


def ensure_parent_dir(path: str | Path) -> Path:
    """确保父目录存在"""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    return p


def resolve_encoding(name: str) -> str:
    """将配置中的编码名称转换为实际编码

    "locale" 表示使用系统默认文本编码，其它值原样返回。
    """
    if name == "locale":
        return locale.getpreferredencoding(False)
    return name


def read_bytes_file(path: str | Path) -> bytes:
    """读取二进制文件全部内容"""
    with Path(path).open("rb") as f:
        return f.read()


def write_bytes_file(
    path: str | Path,
    data: bytes,
    atomic: bool = False
) -> int:
    """写入二进制文件

    非原子模式下写入失败可能留下不完整的文件，不做清理。

    Args:
        path: 文件路径
        data: 文件内容
        atomic: 是否使用原子写入（先写临时文件再重命名）

    Returns:
        写入的字节数
    """
    p = ensure_parent_dir(path)

    if atomic:
        # 原子写入：先写入临时文件，再重命名
        fd, tmp_path = tempfile.mkstemp(
            dir=p.parent,
            prefix=f".{p.name}.",
            suffix=".tmp"
        )
        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(data)
            # 原子重命名
            os.replace(tmp_path, p)
        except Exception:
            # 清理临时文件
            try:
                os.unlink(tmp_path)
            except OSError:
                logger.debug(f"Could not remove temporary file {tmp_path}")
            raise
    else:
        with p.open('wb') as f:
            f.write(data)

    return len(data)
