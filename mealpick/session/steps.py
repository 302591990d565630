from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class StepOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    emoji: str = ""
    description: str | None = None
    icon_url: str | None = None


class StepConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    subtitle: str
    multi_select: bool = False
    optional: bool = False
    options: list[StepOption] = Field(default_factory=list)

    def option_ids(self) -> list[str]:
        return [o.id for o in self.options]


STEPS: tuple[StepConfig, ...] = (
    StepConfig(
        id="meal_time",
        title="식사 시간",
        subtitle="언제 드실 예정인가요?",
        multi_select=True,
        options=[
            StepOption(id="아침", label="아침", emoji="🌤️", description="가벼운 하루의 시작"),
            StepOption(id="점심", label="점심", emoji="☀️", description="든든한 에너지 충전"),
            StepOption(id="저녁", label="저녁", emoji="🌙", description="수고한 나를 위한 보상"),
            StepOption(id="야식", label="야식", emoji="🌜", description="참을 수 없는 유혹"),
            StepOption(id="간식", label="브런치 · 간식", emoji="☕", description="입이 심심할 때"),
        ],
    ),
    StepConfig(
        id="companion",
        title="누구와",
        subtitle="함께하는 분이 있나요?",
        multi_select=True,
        options=[
            StepOption(id="혼밥", label="나홀로 힐링", emoji="🧑", description="오롯이 즐기는 밥상"),
            StepOption(id="연인", label="연인과 달콤하게", emoji="💕", description="분위기가 필요한 오늘"),
            StepOption(id="친구", label="친구와 즐겁게", emoji="👥", description="수다와 함께 냠냠"),
            StepOption(id="가족", label="가족과 따뜻하게", emoji="👨‍👩‍👧‍👦", description="다같이 도란도란"),
            StepOption(id="회식", label="회식 · 단체", emoji="🎉", description="왁자지껄 신나게"),
        ],
    ),
    StepConfig(
        id="cuisine",
        title="요리 스타일",
        subtitle="어느 나라 요리가 끌리나요?",
        multi_select=True,
        options=[
            StepOption(id="한식", label="한식", emoji="🇰🇷", icon_url="https://flagcdn.com/w80/kr.png", description="한국인은 밥심"),
            StepOption(id="중식", label="중식", emoji="🇨🇳", icon_url="https://flagcdn.com/w80/cn.png", description="기름진 불맛의 매력"),
            StepOption(id="일식", label="일식", emoji="🇯🇵", icon_url="https://flagcdn.com/w80/jp.png", description="정갈하고 깊은 맛"),
            StepOption(id="양식", label="양식", emoji="🇺🇸", icon_url="https://flagcdn.com/w80/us.png", description="우아한 서양의 맛"),
            StepOption(id="아시안", label="아시안", emoji="🇻🇳", icon_url="https://flagcdn.com/w80/vn.png", description="이국적인 향신료"),
            StepOption(id="기타", label="멕시칸 · 기타", emoji="🌮", icon_url="https://flagcdn.com/w80/mx.png", description="색다른 별미가 필요할 때"),
            StepOption(id="상관없음", label="상관없음", emoji="🔀", description="아무거나 다 좋아!"),
        ],
    ),
    StepConfig(
        id="cooking_method",
        title="조리 방식",
        subtitle="어떤 식으로 조리된 요리가 당기나요?",
        multi_select=True,
        options=[
            StepOption(id="국물", label="국물 자작하게", emoji="🍲", description="호로록 마시는 식감"),
            StepOption(id="구이볶음", label="불판 위 구이·볶음", emoji="🍳", description="지글지글 소리까지 맛있는"),
            StepOption(id="튀김", label="바삭바삭 튀김", emoji="🍤", description="기름에 튀긴 건 다 맛있어"),
            StepOption(id="찜삶음", label="부드러운 찜·삶음", emoji="♨️", description="건강하고 촉촉하게"),
            StepOption(id="날것", label="신선한 날것·콜드", emoji="🥗", description="재료 본연의 산뜻함"),
            StepOption(id="상관없음", label="상관없음", emoji="🔀", description="맛있으면 장땡!"),
        ],
    ),
    StepConfig(
        id="taste",
        title="맛 취향",
        subtitle="어떤 맛을 원하시나요? (복수 선택 가능)",
        multi_select=True,
        options=[
            StepOption(id="매콤", label="스트레스 쫙 매콤", emoji="🌶️", description="침샘폭발 틈새공략"),
            StepOption(id="고소", label="크리미 & 고소", emoji="🧈", description="풍미 가득 느끼함"),
            StepOption(id="새콤", label="상큼 발랄 새콤", emoji="🍋", description="입맛 돋우는 산뜻함"),
            StepOption(id="짭조름", label="마성의 단짠/짭조름", emoji="🧂", description="무한 흡입 감칠맛"),
            StepOption(id="달콤", label="기분 업! 달콤상콤", emoji="🍯", description="당 충전 100%"),
            StepOption(id="담백", label="속 편한 담백함", emoji="🥬", description="가볍고 깔끔한 마무리"),
            StepOption(id="얼얼", label="마라 마라! 얼얼함", emoji="🔥", description="중독성 강한 향신료"),
        ],
    ),
    StepConfig(
        id="dish_type",
        title="음식 종류",
        subtitle="어떤 메뉴가 생각나시나요?",
        multi_select=True,
        options=[
            StepOption(id="밥", label="든든한 밥", emoji="🍚", description="비빔밥, 덮밥, 볶음밥"),
            StepOption(id="면", label="호로록 면", emoji="🍜", description="라면, 파스타, 냉면"),
            StepOption(id="국찌개", label="뜨끈한 국/찌개", emoji="🍲", description="김치찌개, 탕, 전골"),
            StepOption(id="고기구이", label="육식파 고기", emoji="🥩", description="삼겹살, 스테이크"),
            StepOption(id="빵분식", label="빵돌이/빵순이 & 분식", emoji="🍕", description="떡볶이, 피자, 샌드위치"),
            StepOption(id="샐러드", label="가벼운 샐러드/포케", emoji="🥗", description="건강 챙기기 건강식"),
            StepOption(id="디저트", label="디저트 & 카페", emoji="🍰", description="여유로운 브런치"),
            StepOption(id="상관없음", label="상관없음", emoji="🔀", description="뭐든 좋아요"),
        ],
    ),
    StepConfig(
        id="temperature",
        title="온도",
        subtitle="뜨겁게? 차갑게?",
        multi_select=True,
        options=[
            StepOption(id="뜨거운", label="이열치열 뜨거움", emoji="🔥", description="호호 불어먹는 맛"),
            StepOption(id="차가운", label="얼어죽어도 아이스", emoji="❄️", description="가슴 뻥 뚫리는 시원함"),
            StepOption(id="상온", label="상관없음", emoji="🌡️", description="딱 먹기 좋은 온도"),
        ],
    ),
    StepConfig(
        id="budget",
        title="예산",
        subtitle="생각해둔 가격대가 있나요?",
        multi_select=True,
        options=[
            StepOption(id="가성비", label="가성비 굿", emoji="💰", description="~8,000원의 소확행"),
            StepOption(id="적당", label="적당하게", emoji="💳", description="8,000~15,000원의 즐거움"),
            StepOption(id="좀쓸게", label="조금 무리해서", emoji="💎", description="15,000~25,000원 은근한 사치"),
            StepOption(id="플렉스", label="오늘 내가 쏜다!", emoji="👑", description="25,000원~ 눈치보지 마!"),
            StepOption(id="상관없음", label="상관없음", emoji="🔀", description="돈이 문제인가!"),
        ],
    ),
    StepConfig(
        id="context",
        title="특별한 상황",
        subtitle="현재 어떤 상황이신가요?",
        optional=True,
        multi_select=True,
        options=[
            StepOption(id="해장", label="과음 후엔 해장", emoji="🍺", description="간을 살려주세요"),
            StepOption(id="다이어트", label="작심삼일 다이어트", emoji="🏃", description="저칼로리 우선"),
            StepOption(id="비", label="비 오는 날 감성", emoji="☔", description="파전에 막걸리 각"),
            StepOption(id="우울해", label="기분 꿀꿀한 날", emoji="🥺", description="위로가 되는 소울푸드"),
            StepOption(id="월급날", label="월급날 플렉스", emoji="💸", description="고생한 나에게 선물"),
            StepOption(id="넷플릭스", label="넷플릭스 정주행", emoji="📺", description="드라마 보며 먹기 좋은"),
            StepOption(id="시간없어", label="빨리 먹고 가야해", emoji="⏰", description="스피드가 생명"),
            StepOption(id="패스", label="초능력 평범함", emoji="🚫", description="특별한 상황은 아님"),
        ],
    ),
)

STEPS_BY_ID: dict[str, StepConfig] = {step.id: step for step in STEPS}


def get_step(step_id: str) -> StepConfig:
    """Return the step definition for *step_id*. Raises ``ValueError`` for unknown ids."""
    try:
        return STEPS_BY_ID[step_id]
    except KeyError:
        raise ValueError(f"Unknown step: {step_id}") from None
