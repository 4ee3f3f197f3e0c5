"""Fixtures partagées: blocs hero prêts à migrer / dupliquer."""
import pytest

from hero_variants import default_instance


@pytest.fixture
def centered():
    """Bloc centered : titre "Welcome", deux boutons, texte centré."""
    block = default_instance("centered", block_id="hero-home")
    block["title"] = {"text": "Welcome", "tag": "h1"}
    block["primaryButton"]["text"] = "Get Started"
    block["primaryButton"]["url"] = "/signup"
    block["secondaryButton"]["text"] = "Learn More"
    block["secondaryButton"]["url"] = "/about"
    block["textAlign"] = "center"
    return block


@pytest.fixture
def split_three_buttons():
    block = default_instance("split-screen", block_id="hero-split")
    block["content"]["buttons"] = [
        {"text": "Essai gratuit", "url": "/trial", "style": "primary", "size": "lg",
         "iconPosition": "right", "target": "_self"},
        {"text": "Démo", "url": "/demo", "style": "outline", "size": "lg",
         "iconPosition": "left", "target": "_self"},
        {"text": "Tarifs", "url": "/pricing", "style": "ghost", "size": "md",
         "iconPosition": "right", "target": "_self"},
    ]
    return block
