"""The game: scene loading, frame updates and the interactive window."""

from __future__ import annotations

import sys
from array import array
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from cubed.player import Key, Player
from cubed.raycaster import render_frame
from cubed.scene import MapError, Scene, check_map_format, load_scene
from cubed.texture import Texture
from cubed.xpm import XpmError, load_xpm

WIDTH = 640
HEIGHT = 480
TITLE = "cub3D"
FPS = 60


@dataclass
class Game:
    """A loaded scene together with the player, wall textures and frame buffer."""

    scene: Scene
    player: Player
    textures: tuple[Texture, ...]
    frame: Texture
    running: bool = True

    @classmethod
    def load(cls, path: str | Path) -> Game:
        """Load a ``.cub`` scene and its wall textures.

        Raises :class:`MapError` for a bad scene and :class:`XpmError` for a
        texture that cannot be loaded.
        """
        scene = load_scene(check_map_format(path))
        textures = tuple(load_xpm(texture) for texture in scene.textures)
        player = Player.from_grid(scene.grid)
        return cls(scene, player, textures, Texture(WIDTH, HEIGHT))

    def tick(self) -> Texture:
        """Render the current view, then advance the player by one frame."""
        render_frame(self.frame, self.textures, self.scene.grid, self.player, self.scene.colors)
        self.player.update(self.scene.grid)
        return self.frame

    def _press(self, key: Key) -> None:
        if key == Key.ESCAPE:
            self.running = False
        else:
            self.player.key_pressed(key)

    def _surface(self, pygame):
        opaque = array("I", ((p & 0xFFFFFF) | 0xFF000000 for p in self.frame.pixels))
        if sys.byteorder == "big":
            opaque.byteswap()
        size = (self.frame.width, self.frame.height)
        return pygame.image.frombuffer(opaque.tobytes(), size, "BGRA")

    def run(self) -> None:
        """Open a window and play until it is closed or Escape is pressed."""
        import pygame

        pygame.init()
        try:
            screen = pygame.display.set_mode((self.frame.width, self.frame.height))
            pygame.display.set_caption(TITLE)
            keymap = {
                pygame.K_w: Key.W,
                pygame.K_a: Key.A,
                pygame.K_s: Key.S,
                pygame.K_d: Key.D,
                pygame.K_LEFT: Key.LEFT,
                pygame.K_RIGHT: Key.RIGHT,
                pygame.K_ESCAPE: Key.ESCAPE,
            }
            clock = pygame.time.Clock()
            self.running = True
            while self.running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    elif event.type == pygame.KEYDOWN and event.key in keymap:
                        self._press(keymap[event.key])
                    elif event.type == pygame.KEYUP and event.key in keymap:
                        self.player.key_released(keymap[event.key])
                if not self.running:
                    break
                self.tick()
                screen.blit(self._surface(pygame), (0, 0))
                pygame.display.flip()
                clock.tick(FPS)
        finally:
            pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game on the scene file named by the single argument."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print("Arguments error!\nUsage: cubed <map.cub>", file=sys.stderr)
        return 1
    try:
        game = Game.load(args[0])
    except (MapError, XpmError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    game.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())