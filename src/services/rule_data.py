"""Bundled Japanese deinflection rules.

Rows are ``(kana_in, kana_out, rules_in, rules_out)`` grouped by reason label,
with category tags separated by spaces. An empty ``rules_in`` means the rule
only fires on an uninflected surface form.

The godan rows and the masu-stem families are generated from the kana table
below; irregular verbs (する, 来る, ずる) and the onbin past/te shapes are
spelled out.
"""

# Godan dictionary ending -> (あ段, い段, う段, え段, お段)
_GODAN_ROWS: dict[str, tuple[str, str, str, str, str]] = {
    "う": ("わ", "い", "う", "え", "お"),
    "く": ("か", "き", "く", "け", "こ"),
    "ぐ": ("が", "ぎ", "ぐ", "げ", "ご"),
    "す": ("さ", "し", "す", "せ", "そ"),
    "つ": ("た", "ち", "つ", "て", "と"),
    "ぬ": ("な", "に", "ぬ", "ね", "の"),
    "ぶ": ("ば", "び", "ぶ", "べ", "ぼ"),
    "む": ("ま", "み", "む", "め", "も"),
    "る": ("ら", "り", "る", "れ", "ろ"),
}

A_DAN, I_DAN, U_DAN, E_DAN, O_DAN = range(5)

# Verbs keeping the classical う音便 in the past and te forms (問うた, 乞うて)
_U_ONBIN_VERBS = (
    "こう", "とう", "そう", "おう",
    "請う", "乞う", "恋う", "問う", "負う", "沿う", "添う", "副う", "厭う",
)

Row = tuple[str, str, str, str]


def _godan(suffix: str, dan: int, rules_in: str = "", exclude: tuple[str, ...] = ()) -> list[Row]:
    """One row per godan ending: the ``dan`` kana of that column plus ``suffix``."""
    return [
        (kana[dan] + suffix, ending, rules_in, "v5")
        for ending, kana in _GODAN_ROWS.items()
        if ending not in exclude
    ]


def _masu_stem(suffix: str, rules_in: str = "", *, ichidan: bool = True) -> list[Row]:
    """Rows for an auxiliary attached to the 連用形 (食べ-, 書き-, し-, き-)."""
    rows = [(suffix, "る", rules_in, "v1")] if ichidan else []
    rows += _godan(suffix, I_DAN, rules_in)
    rows += [
        ("じ" + suffix, "ずる", rules_in, "vz"),
        ("し" + suffix, "する", rules_in, "vs"),
        ("為" + suffix, "為る", rules_in, "vs"),
        ("き" + suffix, "くる", rules_in, "vk"),
        ("来" + suffix, "来る", rules_in, "vk"),
        ("來" + suffix, "來る", rules_in, "vk"),
    ]
    return rows


def _onbin(plain: str, voiced: str, rules_in: str = "", *, classical: bool = False) -> list[Row]:
    """Rows for the た/て family, including the sound changes of godan verbs.

    ``plain`` and ``voiced`` are the two spellings of the ending, e.g. た/だ
    or ちゃう/じゃう.
    """
    rows = [
        (plain, "る", rules_in, "v1"),
        ("い" + plain, "く", rules_in, "v5"),
        ("い" + voiced, "ぐ", rules_in, "v5"),
        ("し" + plain, "す", rules_in, "v5"),
        ("っ" + plain, "う", rules_in, "v5"),
        ("っ" + plain, "つ", rules_in, "v5"),
        ("っ" + plain, "る", rules_in, "v5"),
        ("ん" + voiced, "ぬ", rules_in, "v5"),
        ("ん" + voiced, "ぶ", rules_in, "v5"),
        ("ん" + voiced, "む", rules_in, "v5"),
        ("いっ" + plain, "いく", rules_in, "v5"),
        ("行っ" + plain, "行く", rules_in, "v5"),
        ("じ" + plain, "ずる", rules_in, "vz"),
        ("し" + plain, "する", rules_in, "vs"),
        ("為" + plain, "為る", rules_in, "vs"),
        ("き" + plain, "くる", rules_in, "vk"),
        ("来" + plain, "来る", rules_in, "vk"),
        ("來" + plain, "來る", rules_in, "vk"),
    ]
    if classical:
        rows += [
            ("逝っ" + plain, "逝く", rules_in, "v5"),
            ("往っ" + plain, "往く", rules_in, "v5"),
            ("のたもう" + plain, "のたまう", rules_in, "v5"),
        ]
        rows += [(verb + plain, verb, rules_in, "v5") for verb in _U_ONBIN_VERBS]
    return rows


def _negative_stem(suffix: str, rules_in: str = "") -> list[Row]:
    """Rows for an auxiliary attached to the 未然形 (食べ-, 書か-, せ-, こ-)."""
    rows = [(suffix, "る", rules_in, "v1")]
    rows += _godan(suffix, A_DAN, rules_in)
    rows += [
        ("ぜ" + suffix, "ずる", rules_in, "vz"),
        ("せ" + suffix, "する", rules_in, "vs"),
        ("為" + suffix, "為る", rules_in, "vs"),
        ("こ" + suffix, "くる", rules_in, "vk"),
        ("来" + suffix, "来る", rules_in, "vk"),
        ("來" + suffix, "來る", rules_in, "vk"),
    ]
    return rows


DEINFLECTION_RULES: dict[str, list[Row]] = {
    "-ba": [
        ("ければ", "い", "", "adj-i"),
        *_godan("ば", E_DAN, exclude=("る",)),
        ("れば", "る", "", "v1 v5 vk vs vz"),
    ],
    "-chau": _onbin("ちゃう", "じゃう", "v5"),
    "-chimau": _onbin("ちまう", "じまう", "v5"),
    "-shimau": [
        ("てしまう", "て", "v5", "iru"),
        ("でしまう", "で", "v5", "iru"),
    ],
    "-nasai": _masu_stem("なさい"),
    "-sou": [("そう", "い", "", "adj-i"), *_masu_stem("そう")],
    "-sugiru": [("すぎる", "い", "v1", "adj-i"), *_masu_stem("すぎる", "v1")],
    "-tai": _masu_stem("たい", "adj-i"),
    "-tara": [("かったら", "い", "", "adj-i"), *_onbin("たら", "だら", classical=True)],
    "-tari": [("かったり", "い", "", "adj-i"), *_onbin("たり", "だり", classical=True)],
    "-te": [("くて", "い", "iru", "adj-i"), *_onbin("て", "で", "iru", classical=True)],
    "-zu": _negative_stem("ず"),
    "-nu": _negative_stem("ぬ"),
    "adv": [("く", "い", "", "adj-i")],
    "causative": [
        ("させる", "る", "v1", "v1"),
        *_godan("せる", A_DAN, "v1"),
        ("じさせる", "ずる", "v1", "vz"),
        ("ぜさせる", "ずる", "v1", "vz"),
        ("させる", "する", "v1", "vs"),
        ("せさせる", "する", "v1", "vs"),
        ("為せる", "為る", "v1", "vs"),
        ("為させる", "為る", "v1", "vs"),
        ("こさせる", "くる", "v1", "vk"),
        ("来させる", "来る", "v1", "vk"),
        ("來させる", "來る", "v1", "vk"),
    ],
    "imperative": [
        ("ろ", "る", "", "v1"),
        ("よ", "る", "", "v1"),
        *_godan("", E_DAN),
        ("しろ", "する", "", "vs"),
        ("せよ", "する", "", "vs"),
        ("為ろ", "為る", "", "vs"),
        ("為よ", "為る", "", "vs"),
        ("じろ", "ずる", "", "vz"),
        ("ぜよ", "ずる", "", "vz"),
        ("こい", "くる", "", "vk"),
        ("来い", "来る", "", "vk"),
        ("來い", "來る", "", "vk"),
    ],
    "imperative negative": [("な", "", "", "v1 v5 vk vs vz")],
    # The ichidan stem (食べ) would need an empty match suffix
    "masu stem": _masu_stem("", ichidan=False),
    "negative": [
        ("くない", "い", "adj-i", "adj-i"),
        ("ない", "る", "adj-i", "v1"),
        *_godan("ない", A_DAN, "adj-i"),
        ("じない", "ずる", "adj-i", "vz"),
        ("ぜない", "ずる", "adj-i", "vz"),
        ("しない", "する", "adj-i", "vs"),
        ("為ない", "為る", "adj-i", "vs"),
        ("こない", "くる", "adj-i", "vk"),
        ("来ない", "来る", "adj-i", "vk"),
        ("來ない", "來る", "adj-i", "vk"),
    ],
    "noun": [("さ", "い", "", "adj-i")],
    "passive": [
        *_godan("れる", A_DAN, "v1"),
        ("じされる", "ずる", "v1", "vz"),
        ("ぜされる", "ずる", "v1", "vz"),
        ("される", "する", "v1", "vs"),
        ("為れる", "為る", "v1", "vs"),
    ],
    "past": [("かった", "い", "", "adj-i"), *_onbin("た", "だ", classical=True)],
    "polite": [("くあります", "い", "", "adj-i"), *_masu_stem("ます")],
    "polite negative": [("くありません", "い", "", "adj-i"), *_masu_stem("ません")],
    "polite past": [("くありました", "い", "", "adj-i"), *_masu_stem("ました")],
    "polite past negative": [
        ("くありませんでした", "い", "", "adj-i"),
        *_masu_stem("ませんでした"),
    ],
    "polite volitional": _masu_stem("ましょう"),
    "potential": [
        *_godan("る", E_DAN, "v1"),
        ("これる", "くる", "v1", "vk"),
        ("来れる", "来る", "v1", "vk"),
        ("來れる", "來る", "v1", "vk"),
    ],
    "potential or passive": [
        ("られる", "る", "v1", "v1"),
        ("ざれる", "ずる", "v1", "vz"),
        ("ぜられる", "ずる", "v1", "vz"),
        ("せられる", "する", "v1", "vs"),
        ("為られる", "為る", "v1", "vs"),
        ("こられる", "くる", "v1", "vk"),
        ("来られる", "来る", "v1", "vk"),
        ("來られる", "來る", "v1", "vk"),
    ],
    "volitional": [
        ("よう", "る", "", "v1"),
        *_godan("う", O_DAN),
        ("じよう", "ずる", "", "vz"),
        ("ぜよう", "ずる", "", "vz"),
        ("しよう", "する", "", "vs"),
        ("為よう", "為る", "", "vs"),
        ("こよう", "くる", "", "vk"),
        ("来よう", "来る", "", "vk"),
        ("來よう", "來る", "", "vk"),
        ("かろう", "い", "", "adj-i"),
    ],
    # 話させられる keeps the long form, so there is no さされる row
    "causative passive": _godan("される", A_DAN, "v1", exclude=("す",)),
    "-toku": _onbin("とく", "どく", "v5"),
    "progressive or perfect": [
        ("ている", "て", "v1", "iru"),
        ("ておる", "て", "v5", "iru"),
        ("てる", "て", "v1", "iru"),
        ("でいる", "で", "v1", "iru"),
        ("でおる", "で", "v5", "iru"),
        ("でる", "で", "v1", "iru"),
        ("とる", "て", "v5", "iru"),
        ("ないでいる", "ない", "v1", "adj-i"),
    ],
    "-ki": [("き", "い", "", "adj-i")],
    "-ge": [("しげ", "しい", "", "adj-i")],
    # Colloquial vowel fusion (すげえ, さみい, ちっちぇえ)
    "-e": [
        ("ねえ", "ない", "", "adj-i"),
        ("めえ", "むい", "", "adj-i"),
        ("めえ", "まい", "", "adj-i"),
        ("みい", "むい", "", "adj-i"),
        ("ちい", "つい", "", "adj-i"),
        ("ちぇえ", "つい", "", "adj-i"),
        ("ちぇえ", "ちゃい", "", "adj-i"),
        ("せえ", "すい", "", "adj-i"),
        ("せえ", "さい", "", "adj-i"),
        ("ええ", "いい", "", "adj-i"),
        ("ええ", "わい", "", "adj-i"),
        ("ええ", "よい", "", "adj-i"),
        ("いぇえ", "よい", "", "adj-i"),
        ("うぇえ", "わい", "", "adj-i"),
        ("けえ", "かい", "", "adj-i"),
        ("げえ", "がい", "", "adj-i"),
        ("げえ", "ごい", "", "adj-i"),
        ("てえ", "たい", "", "adj-i"),
        ("でえ", "どい", "", "adj-i"),
        ("べえ", "ばい", "", "adj-i"),
        ("れえ", "るい", "", "adj-i"),
        ("ぜえ", "ずい", "", "adj-i"),
        ("っぜえ", "ずい", "", "adj-i"),
    ],
}
