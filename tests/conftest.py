"""
Pytest 配置文件

为所有测试配置共享的 fixtures：
- 语言文件（language.<id>.bin）构造
- 临时游戏目录
- LanguageTypes.xml 构造
"""

import struct
import sys
import zlib
from pathlib import Path
from xml.sax.saxutils import quoteattr, escape

import pytest

# 添加 src 目录到 Python 路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))


def build_lang_bytes(entries, header=0, count=None, trailing=b""):
    """按游戏格式构造语言文件字节"""
    payload = bytearray(struct.pack(">I", len(entries) if count is None else count))
    for key, value in entries:
        for s in (key, value):
            raw = s.encode("utf-8")
            payload += struct.pack(">H", len(raw)) + raw
    payload += trailing
    return struct.pack("<I", header) + zlib.compress(bytes(payload))


@pytest.fixture
def lang_bytes():
    """返回语言文件字节构造函数"""
    return build_lang_bytes


@pytest.fixture
def game_dir(tmp_path):
    """带有空 languages/ 目录的游戏根目录"""
    root = tmp_path / "Brawlhalla"
    (root / "languages").mkdir(parents=True)
    return root


@pytest.fixture
def write_lang(game_dir):
    """在 game_dir/languages 下写入 language.<id>.bin"""
    def _write(lang_id, entries, **kwargs):
        path = game_dir / "languages" / f"language.{lang_id}.bin"
        path.write_bytes(build_lang_bytes(entries, **kwargs))
        return path
    return _write


@pytest.fixture
def write_language_types(tmp_path):
    """写入 LanguageTypes.xml；name 或 id 为 None 时省略对应属性/元素"""
    def _write(languages, root_tag="LanguageTypes", filename="LanguageTypes.xml"):
        parts = [f"<{root_tag}>"]
        for name, lang_id in languages:
            attr = f" LanguageName={quoteattr(name)}" if name is not None else ""
            inner = f"<LanguageID>{escape(lang_id)}</LanguageID>" if lang_id is not None else ""
            parts.append(f"  <LanguageType{attr}>{inner}</LanguageType>")
        parts.append(f"</{root_tag}>")
        path = tmp_path / filename
        path.write_text("\n".join(parts), encoding="utf-8")
        return path
    return _write
