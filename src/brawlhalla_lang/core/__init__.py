"""
语言文件导出核心模块

提供语言注册、语言文件解码、多语言合并与 TSV 导出
"""

from .registry import LanguageDescriptor, LanguageRegistry, register_languages
from .decoder import LangFile, LangFileDecoder, decode_lang_bytes
from .diagnostics import Diagnostic, DiagnosticLog
from .reconcile import ReconciliationRow, ReconciliationTable, ExportTable
from .exporter import TsvExporter, escape_value, unescape_value
from .pipeline import ExportResult, build_table, export_languages, run_export

__all__ = [
    'LanguageDescriptor',
    'LanguageRegistry',
    'register_languages',
    'LangFile',
    'LangFileDecoder',
    'decode_lang_bytes',
    'Diagnostic',
    'DiagnosticLog',
    'ReconciliationRow',
    'ReconciliationTable',
    'ExportTable',
    'TsvExporter',
    'escape_value',
    'unescape_value',
    'ExportResult',
    'build_table',
    'export_languages',
    'run_export',
]
