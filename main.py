"""
main.py — Bootstrap

1. Load gameplay tuning from data/tuning.toml
2. Create the app (800×600 virtual surface)
3. Push the title scene
4. Run
"""

from core import tuning
from core.app import App
from scenes.menu_scene import MenuScene


def main():
    tuning.load()
    app = App(title="Stealth Harvest")
    app.push_scene(MenuScene())
    app.run()


if __name__ == "__main__":
    main()
