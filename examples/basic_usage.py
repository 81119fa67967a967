"""Basic usage examples for transcachex.

This demonstrates translated attributes on a record, the per-locale read cache
and how saving or reloading the record resets it.
"""

import logging

from transcachex import (
    HashBackend,
    TableBackend,
    TranslatableRecord,
    TranslationTable,
    with_locale,
)

logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")


# 1. Declare a record with translated attributes
class Article(TranslatableRecord):
    """Title and content live in hash columns, one dict per attribute."""


Article.translates("title", "content", backend=HashBackend)


# 2. A second record type storing translations in a separate Arrow table
table = TranslationTable(lru_size=256)


class Product(TranslatableRecord):
    """Name stored as rows of a shared translation table."""


Product.translates("name", backend=TableBackend, table=table)


def main():
    article = Article.create(title="Hello", content="First post")
    with with_locale("fr"):
        article.title = "Bonjour"
        article.content = "Premier billet"
    article.save()

    # First read hits the hash column, the second one is served from cache
    print(f"en title: {article.title}")
    print(f"en title: {article.title}")
    with with_locale("fr"):
        print(f"fr title: {article.title}")

    # Unsaved changes are dropped on reload, and every cache is cleared
    article.title = "Draft"
    article.reload()
    print(f"after reload: {article.title}")

    product = Product.create(name="Chair")
    with with_locale("de"):
        product.name = "Stuhl"
    product.save()
    print(f"product locales: {product.backend_for('name').backend.locales()}")

    path = table.save("./translations.arrow")
    print(f"Saved {len(table)} rows to {path}")


if __name__ == "__main__":
    main()
