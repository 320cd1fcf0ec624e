from .constants import DEFAULT_LANGUAGE, LANGUAGES

LANGUAGE_LABELS: dict[str, str] = {
    "en": "English",
    "zh-HK": "繁體中文",
    "zh-CN": "简体中文",
    "ja": "日本語",
    "ko": "한국어",
}

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        "app.title": "Chord Map",
        "app.subtitle": "Harmonic substitution explorer",
        "search.placeholder": "Search chords...",
        "transpose.up": "Transposed up",
        "transpose.down": "Transposed down",
        "ai.assistant": "AI Assistant",
        "modal.voicing": "Guitar Voicing",
        "modal.keyboard": "Keyboard",
        "modal.notation": "Notation",
        "modal.analysis": "AI Analysis",
        "modal.analyzing": "Analyzing chord...",
        "analysis.aiName": "Harmony Assistant",
        "analysis.usage": "Usage",
        "analysis.feeling": "Feeling",
        "cat.sec": "Sec. Dom",
        "cat.sub": "Tritone Sub",
        "cat.mod": "Borrowed",
        "cat.dim": "Dim. Pass",
        "cat.sec.full": "Secondary Dominant",
        "cat.sub.full": "Tritone Substitution",
        "cat.mod.full": "Modal Interchange",
        "cat.dim.full": "Diminished Passing Chord",
        "col.iv.label": "IV",
        "col.iv.degree": "Subdominant",
        "col.iv.desc": "Development",
        "col.v.label": "V",
        "col.v.degree": "Dominant",
        "col.v.desc": "Tension",
        "col.iii.label": "iii",
        "col.iii.degree": "Mediant",
        "col.iii.desc": "Bridge/Ext",
        "col.pass.label": "Pass",
        "col.pass1.degree": "V/V",
        "col.pass1.desc": "Approach V",
        "col.pass2.degree": "V/vi",
        "col.pass2.desc": "Approach vi",
        "col.vi.label": "vi",
        "col.vi.degree": "Submediant",
        "col.vi.desc": "Resolution",
    },
    "zh-HK": {
        "app.title": "和弦地圖",
        "app.subtitle": "和聲代替探索",
        "search.placeholder": "搜尋和弦...",
        "transpose.up": "已升調",
        "transpose.down": "已降調",
        "ai.assistant": "AI 助手",
        "modal.voicing": "結他按法",
        "modal.keyboard": "鍵盤",
        "modal.notation": "五線譜",
        "modal.analysis": "AI 分析",
        "modal.analyzing": "分析和弦中...",
        "analysis.aiName": "和聲助手",
        "analysis.usage": "用法",
        "analysis.feeling": "感覺",
        "cat.sec": "副屬",
        "cat.sub": "三全音代",
        "cat.mod": "借用",
        "cat.dim": "減經過",
        "cat.sec.full": "副屬和弦",
        "cat.sub.full": "三全音代理",
        "cat.mod.full": "調式互換",
        "cat.dim.full": "減七經過和弦",
        "col.iv.label": "IV",
        "col.iv.degree": "下屬",
        "col.iv.desc": "發展",
        "col.v.label": "V",
        "col.v.degree": "屬",
        "col.v.desc": "緊張",
        "col.iii.label": "iii",
        "col.iii.degree": "中音",
        "col.iii.desc": "橋接/延伸",
        "col.pass.label": "經過",
        "col.pass1.degree": "V/V",
        "col.pass1.desc": "趨向 V",
        "col.pass2.degree": "V/vi",
        "col.pass2.desc": "趨向 vi",
        "col.vi.label": "vi",
        "col.vi.degree": "下中音",
        "col.vi.desc": "解決",
    },
    "zh-CN": {
        "app.title": "和弦地图",
        "app.subtitle": "和声替代探索",
        "search.placeholder": "搜索和弦...",
        "transpose.up": "已升调",
        "transpose.down": "已降调",
        "ai.assistant": "AI 助手",
        "modal.voicing": "吉他按法",
        "modal.keyboard": "键盘",
        "modal.notation": "五线谱",
        "modal.analysis": "AI 分析",
        "modal.analyzing": "正在分析和弦...",
        "analysis.aiName": "和声助手",
        "analysis.usage": "用法",
        "analysis.feeling": "感觉",
        "cat.sec": "副属",
        "cat.sub": "三全音替代",
        "cat.mod": "借用",
        "cat.dim": "减经过",
        "cat.sec.full": "副属和弦",
        "cat.sub.full": "三全音替代",
        "cat.mod.full": "调式交替",
        "cat.dim.full": "减七经过和弦",
        "col.iv.label": "IV",
        "col.iv.degree": "下属",
        "col.iv.desc": "发展",
        "col.v.label": "V",
        "col.v.degree": "属",
        "col.v.desc": "紧张",
        "col.iii.label": "iii",
        "col.iii.degree": "中音",
        "col.iii.desc": "桥接/延伸",
        "col.pass.label": "经过",
        "col.pass1.degree": "V/V",
        "col.pass1.desc": "趋向 V",
        "col.pass2.degree": "V/vi",
        "col.pass2.desc": "趋向 vi",
        "col.vi.label": "vi",
        "col.vi.degree": "下中音",
        "col.vi.desc": "解决",
    },
    "ja": {
        "app.title": "コードマップ",
        "app.subtitle": "代理コード探索",
        "search.placeholder": "コードを検索...",
        "transpose.up": "半音上げました",
        "transpose.down": "半音下げました",
        "ai.assistant": "AI アシスタント",
        "modal.voicing": "ギター押さえ方",
        "modal.keyboard": "鍵盤",
        "modal.notation": "譜面",
        "modal.analysis": "AI 解説",
        "modal.analyzing": "コードを解析中...",
        "analysis.aiName": "ハーモニーアシスタント",
        "analysis.usage": "使い方",
        "analysis.feeling": "響き",
        "cat.sec": "セカンダリー",
        "cat.sub": "裏コード",
        "cat.mod": "借用",
        "cat.dim": "パッシングディム",
        "cat.sec.full": "セカンダリードミナント",
        "cat.sub.full": "裏コード（トライトーン代理）",
        "cat.mod.full": "モーダルインターチェンジ",
        "cat.dim.full": "パッシングディミニッシュ",
        "col.iv.label": "IV",
        "col.iv.degree": "サブドミナント",
        "col.iv.desc": "展開",
        "col.v.label": "V",
        "col.v.degree": "ドミナント",
        "col.v.desc": "緊張",
        "col.iii.label": "iii",
        "col.iii.degree": "メディアント",
        "col.iii.desc": "ブリッジ/拡張",
        "col.pass.label": "経過",
        "col.pass1.degree": "V/V",
        "col.pass1.desc": "V へのアプローチ",
        "col.pass2.degree": "V/vi",
        "col.pass2.desc": "vi へのアプローチ",
        "col.vi.label": "vi",
        "col.vi.degree": "サブメディアント",
        "col.vi.desc": "解決",
    },
    "ko": {
        "app.title": "코드 맵",
        "app.subtitle": "화성 대리 탐색기",
        "search.placeholder": "코드 검색...",
        "transpose.up": "반음 올림",
        "transpose.down": "반음 내림",
        "ai.assistant": "AI 도우미",
        "modal.voicing": "기타 보이싱",
        "modal.keyboard": "건반",
        "modal.notation": "악보",
        "modal.analysis": "AI 분석",
        "modal.analyzing": "코드 분석 중...",
        "analysis.aiName": "화성 도우미",
        "analysis.usage": "용법",
        "analysis.feeling": "느낌",
        "cat.sec": "세컨더리",
        "cat.sub": "트라이톤 대리",
        "cat.mod": "차용",
        "cat.dim": "경과 디미니시",
        "cat.sec.full": "세컨더리 도미넌트",
        "cat.sub.full": "트라이톤 대리",
        "cat.mod.full": "모달 인터체인지",
        "cat.dim.full": "경과 디미니시 코드",
        "col.iv.label": "IV",
        "col.iv.degree": "서브도미넌트",
        "col.iv.desc": "전개",
        "col.v.label": "V",
        "col.v.degree": "도미넌트",
        "col.v.desc": "긴장",
        "col.iii.label": "iii",
        "col.iii.degree": "미디언트",
        "col.iii.desc": "브리지/확장",
        "col.pass.label": "경과",
        "col.pass1.degree": "V/V",
        "col.pass1.desc": "V로 접근",
        "col.pass2.degree": "V/vi",
        "col.pass2.desc": "vi로 접근",
        "col.vi.label": "vi",
        "col.vi.degree": "서브미디언트",
        "col.vi.desc": "해결",
    },
}

# Column id → (label key, degree key, description key)
_COLUMN_KEYS: dict[str, tuple[str, str, str]] = {
    "iv": ("col.iv.label", "col.iv.degree", "col.iv.desc"),
    "v": ("col.v.label", "col.v.degree", "col.v.desc"),
    "iii": ("col.iii.label", "col.iii.degree", "col.iii.desc"),
    "pass1": ("col.pass.label", "col.pass1.degree", "col.pass1.desc"),
    "pass2": ("col.pass.label", "col.pass2.degree", "col.pass2.desc"),
    "vi": ("col.vi.label", "col.vi.degree", "col.vi.desc"),
}


def check_language(language: str) -> str:
    if language not in LANGUAGES:
        raise ValueError(f"Unsupported language {language!r}; expected one of {LANGUAGES}")
    return language


def translate(language: str, key: str) -> str:
    """Look up a UI string; falls back to English, then to the key itself."""
    table = TRANSLATIONS.get(language, TRANSLATIONS[DEFAULT_LANGUAGE])
    return table.get(key, TRANSLATIONS[DEFAULT_LANGUAGE].get(key, key))


def column_display(column_id: str, language: str = DEFAULT_LANGUAGE) -> dict[str, str]:
    """Localized header for a column: {"label", "degree", "desc"}."""
    if column_id not in _COLUMN_KEYS:
        return {"label": "", "degree": "", "desc": ""}
    label_key, degree_key, desc_key = _COLUMN_KEYS[column_id]
    return {
        "label": translate(language, label_key),
        "degree": translate(language, degree_key),
        "desc": translate(language, desc_key),
    }
