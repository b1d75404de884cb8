"""
User-facing notification messages, in English and Japanese.

Keys follow the dotted naming of the browser front end's locale files.
"""

from typing import Dict, Union

from ..enums import Language

MESSAGES: Dict[Language, Dict[str, str]] = {
    Language.EN: {
        "alerts.fillAllFields": "Please fill in all fields.",
        "alerts.invalidInput": "Please check the entered values.",
        "alerts.enterCalculationName": "Please enter a calculation name.",
        "alerts.performCalculationFirst": "Please perform a calculation first.",
        "alerts.saved": "Calculation saved.",
        "alerts.deleted": "Calculation deleted.",
        "alerts.jsonLoaded": "JSON file loaded.",
        "alerts.jsonDownloaded": "JSON file downloaded.",
        "alerts.invalidJsonFormat": "Invalid JSON format.",
        "alerts.jsonLoadFailed": "Failed to load the JSON file.",
        "alerts.presetLoadError": "Some presets could not be loaded.",
        "dialog.deleteConfirm.title": "Delete calculation",
        "dialog.deleteConfirm.message": "Are you sure you want to delete this calculation? This cannot be undone.",
    },
    Language.JA: {
        "alerts.fillAllFields": "すべての項目を入力してください。",
        "alerts.invalidInput": "入力値を確認してください。",
        "alerts.enterCalculationName": "計算名を入力してください。",
        "alerts.performCalculationFirst": "先に計算を実行してください。",
        "alerts.saved": "計算結果を保存しました。",
        "alerts.deleted": "計算結果を削除しました。",
        "alerts.jsonLoaded": "JSONファイルを読み込みました。",
        "alerts.jsonDownloaded": "JSONファイルをダウンロードしました。",
        "alerts.invalidJsonFormat": "JSONの形式が正しくありません。",
        "alerts.jsonLoadFailed": "JSONファイルの読み込みに失敗しました。",
        "alerts.presetLoadError": "一部のプリセットを読み込めませんでした。",
        "dialog.deleteConfirm.title": "計算結果の削除",
        "dialog.deleteConfirm.message": "この計算結果を削除しますか？この操作は元に戻せません。",
    },
}


def translate(key: str, language: Union[Language, str] = Language.EN) -> str:
    """Look up a message, falling back to English and then to the key itself."""
    if isinstance(language, str):
        try:
            language = Language(language)
        except ValueError:
            language = Language.EN
    return MESSAGES[language].get(key) or MESSAGES[Language.EN].get(key, key)
