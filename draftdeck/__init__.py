"""DraftDeck: turns drafted and sealed pools into constructed decks."""
