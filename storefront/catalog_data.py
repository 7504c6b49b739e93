# storefront/catalog_data.py
"""
Fixed product catalog.

The shop has no inventory service; these records are loaded into the
catalog store once at import time.
"""

from storefront.models.product import Category, Product

PRODUCTS: list[Product] = [
    Product(
        id=1,
        name="Класически краставички",
        price="8.90",
        rating=4.8,
        reviews=124,
        category=Category.PICKLES,
        badge="Бестселър",
        description=(
            "Традиционни български краставички, приготвени по автентична рецепта. "
            "Хрупкави и ароматни, идеални за всяка трапеза."
        ),
        ingredients=["Краставички", "Вода", "Оцет", "Сол", "Захар", "Копър"],
        weight="720г",
        in_stock=True,
        stock_quantity=45,
    ),
    Product(
        id=2,
        name="Лютеница домашна",
        price="12.50",
        rating=4.9,
        reviews=89,
        category=Category.LYUTENITSA,
        badge="Ново",
        description=(
            "Домашна лютеница с богат вкус и аромат. Приготвена от най-качествени "
            "червени чушки и домати."
        ),
        ingredients=["Червени чушки", "Домати", "Лук", "Чесън", "Олио", "Сол", "Захар"],
        weight="550г",
        in_stock=True,
        stock_quantity=32,
    ),
    Product(
        id=3,
        name="Смесени зеленчуци",
        price="10.90",
        rating=4.7,
        reviews=156,
        category=Category.MIXED,
        badge="Популярно",
        description="Цветна смес от сезонни зеленчуци, богата на витамини и минерали.",
        ingredients=["Карфиол", "Моркови", "Зеле", "Чушки", "Оцет", "Сол"],
        weight="680г",
        in_stock=True,
        stock_quantity=28,
    ),
    Product(
        id=4,
        name="Туршия от карфиол",
        price="9.50",
        rating=4.6,
        reviews=78,
        category=Category.VEGETABLES,
        description="Нежен карфиол в ароматна туршия, богат на витамини и полезни вещества.",
        ingredients=["Карфиол", "Вода", "Оцет", "Сол", "Лаврови листа"],
        weight="650г",
        in_stock=True,
        stock_quantity=22,
    ),
    Product(
        id=5,
        name="Кисели краставички",
        price="7.90",
        rating=4.8,
        reviews=203,
        category=Category.PICKLES,
        description="Традиционни кисели краставички с неповторим вкус и аромат.",
        ingredients=["Краставички", "Вода", "Сол", "Чесън", "Копър"],
        weight="700г",
        in_stock=True,
        stock_quantity=67,
    ),
    Product(
        id=6,
        name="Туршия от зеле",
        price="6.50",
        rating=4.5,
        reviews=92,
        category=Category.VEGETABLES,
        description="Хрупкаво зеле в традиционна туршия, богато на витамин C.",
        ingredients=["Зеле", "Моркови", "Вода", "Оцет", "Сол"],
        weight="750г",
        in_stock=True,
        stock_quantity=41,
    ),
    Product(
        id=7,
        name="Лютеница с орехи",
        price="14.90",
        rating=4.9,
        reviews=67,
        category=Category.LYUTENITSA,
        badge="Премиум",
        description="Премиум лютеница обогатена с орехи за неповторим вкус и текстура.",
        ingredients=["Червени чушки", "Домати", "Орехи", "Лук", "Чесън", "Олио"],
        weight="500г",
        in_stock=True,
        stock_quantity=18,
    ),
    Product(
        id=8,
        name="Туршия от моркови",
        price="8.50",
        rating=4.4,
        reviews=45,
        category=Category.VEGETABLES,
        description="Сладки моркови в ароматна туршия, богати на бета-каротин.",
        ingredients=["Моркови", "Вода", "Оцет", "Сол", "Захар", "Лаврови листа"],
        weight="600г",
        in_stock=True,
        stock_quantity=35,
    ),
    Product(
        id=9,
        name="Пикантни чушки",
        price="11.90",
        rating=4.7,
        reviews=134,
        category=Category.PEPPERS,
        description="Остри чушки за любителите на пикантните вкусове.",
        ingredients=["Остри чушки", "Вода", "Оцет", "Сол", "Чесън"],
        weight="450г",
        in_stock=True,
        stock_quantity=29,
    ),
    Product(
        id=10,
        name="Туршия от цвекло",
        price="7.50",
        rating=4.3,
        reviews=56,
        category=Category.VEGETABLES,
        description="Сочно цвекло в традиционна туршия с наситен цвят и вкус.",
        ingredients=["Цвекло", "Вода", "Оцет", "Сол", "Захар"],
        weight="650г",
        in_stock=False,
        stock_quantity=0,
    ),
    Product(
        id=11,
        name="Айвар класик",
        price="13.50",
        rating=4.8,
        reviews=98,
        category=Category.LYUTENITSA,
        description="Класически айвар с богат вкус на печени чушки и патладжани.",
        ingredients=["Червени чушки", "Патладжани", "Лук", "Чесън", "Олио", "Сол"],
        weight="480г",
        in_stock=True,
        stock_quantity=24,
    ),
    Product(
        id=12,
        name="Смесена салата",
        price="9.90",
        rating=4.6,
        reviews=112,
        category=Category.MIXED,
        description="Разнообразна салата от сезонни зеленчуци в ароматна туршия.",
        ingredients=["Домати", "Краставички", "Чушки", "Лук", "Оцет", "Олио", "Сол"],
        weight="620г",
        in_stock=True,
        stock_quantity=33,
    ),
]
