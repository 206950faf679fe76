"""Translation manager for multi-language support (I18N)."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal

# ISO 639-1 codes
LANGUAGES = {
    "en": "English",
    "ko": "한국어",
    "ja": "日本語",
}


class Translator(QObject):
    """Global translation manager singleton."""

    language_changed = pyqtSignal()

    def __init__(self) -> None:
        super().__init__()
        self._current_lang = "en"

        self._data = {
            "en": {
                "app.title": "Timing Sheet",

                # Transport
                "controls.replay": "Replay",
                "controls.play": "Play",
                "controls.pause": "Pause",
                "controls.resume": "Resume",
                "controls.mark": "Mark",
                "controls.marking": "Marking",
                "controls.reset": "Reset",
                "controls.rec": "Rec",
                "controls.stop": "Stop",
                "controls.settings": "Settings",

                # Settings
                "settings.title": "Settings",
                "settings.subtitle": "Please change it to the setting you want and use it.",
                "settings.language": "Language",
                "settings.seconds": "Seconds",
                "settings.fps": "Frame Per Second",
                "settings.prepare": "Time to Prepare",
                "settings.frame_size": "1 Frame Size",
                "settings.thickness": "Thickness",
                "settings.size.small": "Small",
                "settings.size.normal": "Normal",
                "settings.size.large": "Large",

                # Hotkeys
                "hotkeys.title": "Hotkeys",
                "hotkeys.subtitle": "You can use the Hotkeys conveniently.",
                "hotkeys.replay": "REPLAY",
                "hotkeys.play_pause": "PLAY / PAUSE / RESUME",
                "hotkeys.reset": "RESET",
                "hotkeys.marking": "MARKING (Press)",
                "hotkeys.rec_stop": "REC / STOP",

                # Errors
                "error.title": "Application Error",
                "error.text": "An unexpected error occurred. The application will close.",
            },
            "ko": {
                "app.title": "타이밍 시트",

                "controls.replay": "다시 재생",
                "controls.play": "재생",
                "controls.pause": "일시정지",
                "controls.resume": "계속",
                "controls.mark": "마킹",
                "controls.marking": "마킹 중",
                "controls.reset": "초기화",
                "controls.rec": "녹화",
                "controls.stop": "정지",
                "controls.settings": "설정",

                "settings.title": "설정",
                "settings.subtitle": "원하는 설정으로 변경하여 사용하세요.",
                "settings.language": "언어",
                "settings.seconds": "초",
                "settings.fps": "초당 프레임",
                "settings.prepare": "준비 시간",
                "settings.frame_size": "1 프레임 크기",
                "settings.thickness": "두께",
                "settings.size.small": "작게",
                "settings.size.normal": "보통",
                "settings.size.large": "크게",

                "hotkeys.title": "단축키",
                "hotkeys.subtitle": "단축키를 편리하게 사용할 수 있습니다.",
                "hotkeys.replay": "다시 재생",
                "hotkeys.play_pause": "재생 / 일시정지 / 계속",
                "hotkeys.reset": "초기화",
                "hotkeys.marking": "마킹 (누르기)",
                "hotkeys.rec_stop": "녹화 / 정지",

                "error.title": "애플리케이션 오류",
                "error.text": "예기치 않은 오류가 발생하여 애플리케이션을 종료합니다.",
            },
            "ja": {
                "app.title": "タイミングシート",

                "controls.replay": "リプレイ",
                "controls.play": "再生",
                "controls.pause": "一時停止",
                "controls.resume": "再開",
                "controls.mark": "マーク",
                "controls.marking": "マーク中",
                "controls.reset": "リセット",
                "controls.rec": "録画",
                "controls.stop": "停止",
                "controls.settings": "設定",

                "settings.title": "設定",
                "settings.subtitle": "お好みの設定に変更してご利用ください。",
                "settings.language": "言語",
                "settings.seconds": "秒数",
                "settings.fps": "フレームレート",
                "settings.prepare": "準備時間",
                "settings.frame_size": "1フレームのサイズ",
                "settings.thickness": "太さ",
                "settings.size.small": "小",
                "settings.size.normal": "中",
                "settings.size.large": "大",

                "hotkeys.title": "ホットキー",
                "hotkeys.subtitle": "ホットキーで手軽に操作できます。",
                "hotkeys.replay": "リプレイ",
                "hotkeys.play_pause": "再生 / 一時停止 / 再開",
                "hotkeys.reset": "リセット",
                "hotkeys.marking": "マーク (押す)",
                "hotkeys.rec_stop": "録画 / 停止",

                "error.title": "アプリケーションエラー",
                "error.text": "予期しないエラーが発生しました。アプリケーションを終了します。",
            },
        }

    @property
    def current_language(self) -> str:
        return self._current_lang

    def set_language(self, lang_code: str) -> None:
        """Change current language and emit signal."""
        if lang_code in LANGUAGES and lang_code != self._current_lang:
            self._current_lang = lang_code
            self.language_changed.emit()

    def tr(self, key: str, **kwargs) -> str:
        """Translate key to current language. Returns key if not found."""
        lang_data = self._data.get(self._current_lang, {})
        text = lang_data.get(key)

        if text is None:
            text = self._data.get("en", {}).get(key, key)

        try:
            return text.format(**kwargs)
        except (KeyError, ValueError):
            return text


# Global singleton instance
translator = Translator()
