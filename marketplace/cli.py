"""
Flask CLI commands: `flask init-db` and `flask seed-categories`
"""
import click

from marketplace.extensions import db
from marketplace.models import ServiceCategory, ServiceSubcategory

# name, (lv, ru, en), icon, subcategories [(name, (lv, ru, en))]
DEFAULT_CATEGORIES = [
    ("Cleaning", ("Uzkopšana", "Уборка", "Cleaning"), "broom", [
        ("Home cleaning", ("Mājokļa uzkopšana", "Уборка дома", "Home cleaning")),
        ("Window cleaning", ("Logu mazgāšana", "Мойка окон", "Window cleaning")),
    ]),
    ("Repairs", ("Remonts", "Ремонт", "Repairs"), "wrench", [
        ("Plumbing", ("Santehnika", "Сантехника", "Plumbing")),
        ("Electrical", ("Elektrība", "Электрика", "Electrical")),
    ]),
    ("Beauty", ("Skaistumkopšana", "Красота", "Beauty"), "scissors", [
        ("Hairdressing", ("Frizieris", "Парикмахер", "Hairdressing")),
        ("Manicure", ("Manikīrs", "Маникюр", "Manicure")),
    ]),
    ("Transport", ("Transports", "Транспорт", "Transport"), "truck", [
        ("Moving", ("Pārvākšanās", "Переезд", "Moving")),
        ("Delivery", ("Piegāde", "Доставка", "Delivery")),
    ]),
    ("Education", ("Izglītība", "Образование", "Education"), "book", [
        ("Tutoring", ("Privātstundas", "Репетиторство", "Tutoring")),
        ("Language lessons", ("Valodu stundas", "Уроки языка", "Language lessons")),
    ]),
]


def seed_categories():
    """Insert any default categories that are missing. Returns the number created."""
    created = 0
    for order, (name, (lv, ru, en), icon, subs) in enumerate(DEFAULT_CATEGORIES):
        if ServiceCategory.query.filter_by(name=name).first():
            continue
        category = ServiceCategory(
            name=name, name_lv=lv, name_ru=ru, name_en=en, icon=icon, sort_order=order,
        )
        for sub_name, (sub_lv, sub_ru, sub_en) in subs:
            category.subcategories.append(ServiceSubcategory(
                name=sub_name, name_lv=sub_lv, name_ru=sub_ru, name_en=sub_en,
            ))
        db.session.add(category)
        created += 1
    db.session.commit()
    return created


def register_commands(app):
    @app.cli.command("init-db")
    def init_db_command():
        """Create all database tables."""
        db.create_all()
        click.echo("Database tables created.")

    @app.cli.command("seed-categories")
    def seed_categories_command():
        """Insert the default trilingual category tree."""
        created = seed_categories()
        click.echo("Seeded {} categories.".format(created))
