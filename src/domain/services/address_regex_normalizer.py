"""住所名の正規表現化サービス.

住所マスターの地名を、表記ゆれを許容する正規表現断片に変換する。

変換はすべて名前付きのステップとして定義し、固定の順序で適用する:

1. 正規表現メタ文字のエスケープ
2. 大字・字の省略可能化（町丁目のみ）
3. 漢数字＋助数詞の数字表記ゆれ展開（町丁目のみ）
4. 慣用的な表記ゆれ・かな類似文字の展開
5. 旧字体⇔新字体の展開

後段のステップは前段が挿入した `(`・`|`・`)` を含む文字列を入力とするため、
順序を入れ替えると結果が変わる。
"""

from __future__ import annotations

import re

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from src.domain.utils.kansuji import kansuji_to_int


# JIS第2水準→第1水準 及び 旧字体→新字体（記載順に適用する）
JIS_KANJI_VARIANTS: tuple[tuple[str, str], ...] = (
    ("亞", "亜"), ("圍", "囲"), ("壹", "壱"), ("榮", "栄"), ("驛", "駅"), ("應", "応"),
    ("櫻", "桜"), ("假", "仮"), ("會", "会"), ("懷", "懐"), ("覺", "覚"), ("樂", "楽"),
    ("陷", "陥"), ("歡", "歓"), ("氣", "気"), ("戲", "戯"), ("據", "拠"), ("挾", "挟"),
    ("區", "区"), ("徑", "径"), ("溪", "渓"), ("輕", "軽"), ("藝", "芸"), ("儉", "倹"),
    ("圈", "圏"), ("權", "権"), ("嚴", "厳"), ("恆", "恒"), ("國", "国"), ("齋", "斎"),
    ("雜", "雑"), ("蠶", "蚕"), ("殘", "残"), ("兒", "児"), ("實", "実"), ("釋", "釈"),
    ("從", "従"), ("縱", "縦"), ("敍", "叙"), ("燒", "焼"), ("條", "条"), ("剩", "剰"),
    ("壤", "壌"), ("釀", "醸"), ("眞", "真"), ("盡", "尽"), ("醉", "酔"), ("髓", "髄"),
    ("聲", "声"), ("竊", "窃"), ("淺", "浅"), ("錢", "銭"), ("禪", "禅"), ("爭", "争"),
    ("插", "挿"), ("騷", "騒"), ("屬", "属"), ("對", "対"), ("滯", "滞"), ("擇", "択"),
    ("單", "単"), ("斷", "断"), ("癡", "痴"), ("鑄", "鋳"), ("敕", "勅"), ("鐵", "鉄"),
    ("傳", "伝"), ("黨", "党"), ("鬪", "闘"), ("屆", "届"), ("腦", "脳"), ("廢", "廃"),
    ("發", "発"), ("蠻", "蛮"), ("拂", "払"), ("邊", "辺"), ("瓣", "弁"), ("寶", "宝"),
    ("沒", "没"), ("滿", "満"), ("藥", "薬"), ("餘", "余"), ("樣", "様"), ("亂", "乱"),
    ("兩", "両"), ("禮", "礼"), ("靈", "霊"), ("爐", "炉"), ("灣", "湾"), ("惡", "悪"),
    ("醫", "医"), ("飮", "飲"), ("營", "営"), ("圓", "円"), ("歐", "欧"), ("奧", "奥"),
    ("價", "価"), ("繪", "絵"), ("擴", "拡"), ("學", "学"), ("罐", "缶"), ("勸", "勧"),
    ("觀", "観"), ("歸", "帰"), ("犧", "犠"), ("擧", "挙"), ("狹", "狭"), ("驅", "駆"),
    ("莖", "茎"), ("經", "経"), ("繼", "継"), ("缺", "欠"), ("劍", "剣"), ("檢", "検"),
    ("顯", "顕"), ("廣", "広"), ("鑛", "鉱"), ("碎", "砕"), ("劑", "剤"), ("參", "参"),
    ("慘", "惨"), ("絲", "糸"), ("辭", "辞"), ("舍", "舎"), ("壽", "寿"), ("澁", "渋"),
    ("肅", "粛"), ("將", "将"), ("證", "証"), ("乘", "乗"), ("疊", "畳"), ("孃", "嬢"),
    ("觸", "触"), ("寢", "寝"), ("圖", "図"), ("穗", "穂"), ("樞", "枢"), ("齊", "斉"),
    ("攝", "摂"), ("戰", "戦"), ("潛", "潜"), ("雙", "双"), ("莊", "荘"), ("裝", "装"),
    ("藏", "蔵"), ("續", "続"), ("體", "体"), ("臺", "台"), ("澤", "沢"), ("膽", "胆"),
    ("彈", "弾"), ("蟲", "虫"), ("廳", "庁"), ("鎭", "鎮"), ("點", "点"), ("燈", "灯"),
    ("盜", "盗"), ("獨", "独"), ("貳", "弐"), ("霸", "覇"), ("賣", "売"), ("髮", "髪"),
    ("祕", "秘"), ("佛", "仏"), ("變", "変"), ("辯", "弁"), ("豐", "豊"), ("飜", "翻"),
    ("默", "黙"), ("與", "与"), ("譽", "誉"), ("謠", "謡"), ("覽", "覧"), ("獵", "猟"),
    ("勵", "励"), ("齡", "齢"), ("勞", "労"), ("壓", "圧"), ("爲", "為"), ("隱", "隠"),
    ("衞", "衛"), ("鹽", "塩"), ("毆", "殴"), ("穩", "穏"), ("畫", "画"), ("壞", "壊"),
    ("殼", "殻"), ("嶽", "岳"), ("卷", "巻"), ("關", "関"), ("顏", "顔"), ("僞", "偽"),
    ("舊", "旧"), ("峽", "峡"), ("曉", "暁"), ("勳", "勲"), ("惠", "恵"), ("螢", "蛍"),
    ("鷄", "鶏"), ("縣", "県"), ("險", "険"), ("獻", "献"), ("驗", "験"), ("效", "効"),
    ("號", "号"), ("濟", "済"), ("册", "冊"), ("棧", "桟"), ("贊", "賛"), ("齒", "歯"),
    ("濕", "湿"), ("寫", "写"), ("收", "収"), ("獸", "獣"), ("處", "処"), ("稱", "称"),
    ("奬", "奨"), ("淨", "浄"), ("繩", "縄"), ("讓", "譲"), ("囑", "嘱"), ("愼", "慎"),
    ("粹", "粋"), ("隨", "随"), ("數", "数"), ("靜", "静"), ("專", "専"), ("踐", "践"),
    ("纖", "繊"), ("壯", "壮"), ("搜", "捜"), ("總", "総"), ("臟", "臓"), ("墮", "堕"),
    ("帶", "帯"), ("瀧", "滝"), ("擔", "担"), ("團", "団"), ("遲", "遅"), ("晝", "昼"),
    ("聽", "聴"), ("遞", "逓"), ("轉", "転"), ("當", "当"), ("稻", "稲"), ("讀", "読"),
    ("惱", "悩"), ("拜", "拝"), ("麥", "麦"), ("拔", "抜"), ("濱", "浜"), ("竝", "並"),
    ("辨", "弁"), ("舖", "舗"), ("襃", "褒"), ("萬", "万"), ("譯", "訳"), ("豫", "予"),
    ("搖", "揺"), ("來", "来"), ("龍", "竜"), ("壘", "塁"), ("隸", "隷"), ("戀", "恋"),
    ("樓", "楼"), ("鰺", "鯵"), ("鶯", "鴬"), ("蠣", "蛎"), ("攪", "撹"), ("竈", "竃"),
    ("灌", "潅"), ("諫", "諌"), ("頸", "頚"), ("礦", "砿"), ("蘂", "蕊"), ("靱", "靭"),
    ("賤", "賎"), ("壺", "壷"), ("礪", "砺"), ("檮", "梼"), ("濤", "涛"), ("邇", "迩"),
    ("蠅", "蝿"), ("檜", "桧"), ("儘", "侭"), ("藪", "薮"), ("籠", "篭"),
)

# 正式表記の「壱」は数値変換せず固定の同値集合に展開する
FORMAL_ONE = "壱"
FORMAL_ONE_EQUIVALENTS: tuple[str, ...] = ("一", "1", "１")

# 漢数字の直後に続く助数詞
_NUMERAL_TOKEN_RE = re.compile(
    r"([壱一二三四五六七八九十]+)(?:丁目?|番(?:町|丁)|条|軒|線|[のノ]町|地割)"
)

# 助数詞およびハイフン類の置換先
# 助数詞の検出用パターンとは別物であることに注意
COUNTER_ALTERNATION = (
    "((丁|町)目?|番(町|丁)|条|軒|線|の町?|地割|[-－﹣−‐⁃‑‒–—﹘―⎯⏤ーｰ─━])"
)

_OAZA_RE = re.compile("大?字")
_OAZA_OPTIONAL = "(大?字)?"

_HALF_TO_FULL_DIGITS = str.maketrans("0123456789", "０１２３４５６７８９")


@dataclass(frozen=True)
class Substitution:
    """1件の置換規則.

    pattern に一致した部分を replacement（正規表現断片）に置き換える。
    """

    pattern: re.Pattern[str]
    replacement: str

    @classmethod
    def alternation(cls, *forms: str) -> Substitution:
        """いずれかの表記に一致したら `(A|B|...)` に置き換える規則."""
        source = "|".join(re.escape(form) for form in forms)
        return cls(re.compile(source), f"({'|'.join(forms)})")

    @classmethod
    def char_class(cls, chars: str) -> Substitution:
        """いずれかの文字に一致したら `[...]` に置き換える規則."""
        source = f"[{chars}]"
        return cls(re.compile(source), source)


# 慣用的な表記ゆれ・かな類似文字
# なるべく文字数が多いものほど上にすること
IDIOMATIC_VARIANTS: tuple[Substitution, ...] = (
    Substitution.alternation("三栄町", "四谷三栄町"),
    Substitution.alternation("通り", "とおり"),
    Substitution.alternation("埠頭", "ふ頭"),
    Substitution.alternation("鬮野川", "くじ野川", "くじの川"),
    Substitution.char_class("之ノの"),
    Substitution.char_class("ヶケが"),
    Substitution.char_class("ヵカか力"),
    Substitution.char_class("ッツっつ"),
    Substitution.char_class("ニ二"),
    Substitution.char_class("ハ八"),
    Substitution.alternation("大冝", "大宜"),
    Substitution.alternation("穝", "さい"),
    Substitution.alternation("杁", "えぶり"),
    Substitution.alternation("薭", "稗", "ひえ", "ヒエ"),
    Substitution.alternation("釜", "竈"),
    Substitution.alternation("條", "条"),
    Substitution.alternation("狛", "拍"),
    Substitution.alternation("藪", "薮"),
    Substitution.alternation("渕", "淵"),
    Substitution.alternation("エ", "ヱ", "え"),
    Substitution.alternation("曾", "曽"),
)

KANJI_VARIANTS: tuple[Substitution, ...] = tuple(
    Substitution.alternation(old, new) for old, new in JIS_KANJI_VARIANTS
)


def substitute_in_order(text: str, substitutions: Sequence[Substitution]) -> str:
    """置換規則を記載順に1回ずつ適用する.

    ある規則が挿入した断片は以降の規則の置換対象にならない。
    """
    # (文字列, 挿入済み断片かどうか) の列
    segments: list[tuple[str, bool]] = [(text, False)]
    for substitution in substitutions:
        next_segments: list[tuple[str, bool]] = []
        for segment, inserted in segments:
            if inserted:
                next_segments.append((segment, True))
                continue
            last = 0
            for match in substitution.pattern.finditer(segment):
                if match.start() > last:
                    next_segments.append((segment[last : match.start()], False))
                next_segments.append((substitution.replacement, True))
                last = match.end()
            if last < len(segment):
                next_segments.append((segment[last:], False))
        segments = next_segments
    return "".join(segment for segment, _ in segments)


@dataclass(frozen=True)
class TransformationStep:
    """名前付きの変換ステップ."""

    name: str
    transform: Callable[[str], str]

    def __call__(self, text: str) -> str:
        return self.transform(text)


class AddressRegexNormalizer:
    """住所名を表記ゆれ許容の正規表現断片に変換するサービス."""

    @staticmethod
    def escape(text: str) -> str:
        """地名に含まれる正規表現メタ文字をエスケープする."""
        return re.escape(text)

    @staticmethod
    def expand_idiomatic_variants(text: str) -> str:
        """慣用的な表記ゆれ・かな類似文字を展開する.

        例:
            "四谷三栄町" → "(三栄町|四谷三栄町)"
            "竹ノ塚" → "竹[之ノの]塚"
        """
        return substitute_in_order(text, IDIOMATIC_VARIANTS)

    @staticmethod
    def expand_kanji_variants(text: str) -> str:
        """旧字体・新字体のどちらに一致しても `(旧|新)` に展開する.

        例:
            "櫻木町" → "(櫻|桜)木町"
        """
        return substitute_in_order(text, KANJI_VARIANTS)

    @staticmethod
    def make_oaza_optional(text: str) -> str:
        """「大字」「字」を省略可能にする."""
        return _OAZA_RE.sub(_OAZA_OPTIONAL, text)

    @staticmethod
    def normalize_numeral_token(match: re.Match[str]) -> str:
        """漢数字＋助数詞の一致部分を数字表記ゆれの正規表現断片に変換する.

        例:
            "三丁目" → "(三|3|３)((丁|町)目?|番(町|丁)|...|[-－...])"
            "壱番町" → "(壱|一|1|１)((丁|町)目?|番(町|丁)|...|[-－...])"

        Args:
            match: _NUMERAL_TOKEN_RE の一致結果（グループ1が漢数字）

        Returns:
            漢数字・算用数字のいずれかに助数詞またはハイフン類が続く正規表現断片
        """
        numeral = match.group(1)
        if numeral == FORMAL_ONE:
            forms = [numeral, *FORMAL_ONE_EQUIVALENTS]
        else:
            arabic = str(kansuji_to_int(numeral))
            forms = [numeral, arabic, arabic.translate(_HALF_TO_FULL_DIGITS)]
        return f"({'|'.join(forms)}){COUNTER_ALTERNATION}"

    @classmethod
    def normalize_numerals(cls, text: str) -> str:
        """町丁目名中の全ての漢数字＋助数詞を展開する."""
        return _NUMERAL_TOKEN_RE.sub(cls.normalize_numeral_token, text)

    @staticmethod
    def run(text: str, steps: Sequence[TransformationStep]) -> str:
        """ステップを順に適用する."""
        for step in steps:
            text = step(text)
        return text

    @classmethod
    def to_regex_pattern(cls, name: str) -> str:
        """市区町村名などの地名を正規表現断片に変換する."""
        return cls.run(name, NAME_STEPS)

    @classmethod
    def to_town_regex_pattern(cls, town: str) -> str:
        """町丁目名を正規表現断片に変換する."""
        return cls.run(town, TOWN_STEPS)


ESCAPE_STEP = TransformationStep("escape", AddressRegexNormalizer.escape)
OAZA_STEP = TransformationStep("oaza", AddressRegexNormalizer.make_oaza_optional)
NUMERAL_STEP = TransformationStep(
    "numeral", AddressRegexNormalizer.normalize_numerals
)
IDIOMATIC_STEP = TransformationStep(
    "idiomatic", AddressRegexNormalizer.expand_idiomatic_variants
)
KANJI_STEP = TransformationStep(
    "kanji_variant", AddressRegexNormalizer.expand_kanji_variants
)

# 慣用表記の展開は旧字体展開より前
NAME_STEPS: tuple[TransformationStep, ...] = (ESCAPE_STEP, IDIOMATIC_STEP, KANJI_STEP)
TOWN_STEPS: tuple[TransformationStep, ...] = (
    ESCAPE_STEP,
    OAZA_STEP,
    NUMERAL_STEP,
    IDIOMATIC_STEP,
    KANJI_STEP,
)
