#!/usr/bin/env python3
"""
Interactive Dot Game with Pygame
Place typed dots, watch them interact, and toggle the life rules
"""
from __future__ import annotations

import argparse
import logging
from typing import Optional

import pygame

from .config import DEFAULT_CONFIG_PATH, DotConfig
from .dot_types import DotType
from .presets import list_presets
from .simulation import Simulation

BACKGROUND = (0, 0, 0)
AURA_ALPHA = 25
INITIAL_DOTS = 50
RESEED_DOTS = 100


class DotGameApp:
    """Pygame front end: draws the simulation and turns input into intents"""

    def __init__(self, simulation: Simulation, config_path: str = DEFAULT_CONFIG_PATH):
        self.sim = simulation
        self.config_path = config_path
        self.preset_index = 0

        pygame.init()
        self.screen = pygame.display.set_mode((int(simulation.width), int(simulation.height)))
        pygame.display.set_caption("DotGame - Game of Life Evolution")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 22)

        # Shared translucent layer for auras
        self.aura_layer = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)

    def draw(self):
        """Draw every live dot and the HUD"""
        self.screen.fill(BACKGROUND)
        views = self.sim.visible_dots()
        radius = self.sim.config.interaction_radius

        if self.sim.show_aura:
            self.aura_layer.fill((0, 0, 0, 0))
            for view in views:
                r, g, b, _ = view.color
                pygame.draw.circle(self.aura_layer, (r, g, b, AURA_ALPHA), (int(view.x), int(view.y)), int(radius))
            self.screen.blit(self.aura_layer, (0, 0))

        for view in views:
            pos = (int(view.x), int(view.y))
            pygame.draw.circle(self.screen, view.color[:3], pos, max(1, int(view.radius)))

            # Velocity vector
            if self.sim.show_aura:
                end = (view.x + view.vx * 5.0, view.y + view.vy * 5.0)
                pygame.draw.line(self.screen, (255, 255, 255), pos, end, 1)

        self.draw_info()

    def draw_info(self):
        """Draw information panel"""
        sim = self.sim
        info_lines = [
            f"FPS: {int(self.clock.get_fps())} | Dots: {sim.alive_count()} | Type: {sim.selected_type.label} (Tab to change)",
            f"Space: Pause {'||' if sim.paused else '>'} | A: Aura {'on' if sim.show_aura else 'off'} | "
            f"G: Game of Life {'on' if sim.life_mode else 'off'} | C: Clear | R: Random",
            f"1/2: Speed +/- ({sim.config.max_speed:.0f}) | S: Save Config | L: Load Config | P: Next preset",
            "Left Click: Add | Right Click: Remove",
        ]

        y = 10
        for line in info_lines:
            text = self.font.render(line, True, (255, 255, 255))
            self.screen.blit(text, (10, y))
            y += 22

        # Selected type indicator
        x = int(sim.width) - 50
        pygame.draw.circle(self.screen, sim.selected_type.color[:3], (x, 50), 20)
        label = self.font.render("Selected", True, (255, 255, 255))
        self.screen.blit(label, label.get_rect(center=(x, 85)))

    def next_preset(self):
        presets = list_presets()
        self.preset_index = (self.preset_index + 1) % len(presets)
        preset = self.sim.apply_preset(presets[self.preset_index].name)
        print(f"Preset: {preset.name} - {preset.description}")

    def handle_events(self) -> bool:
        """Handle pygame events. Returns False to quit."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE or event.key == pygame.K_q:
                    return False
                elif event.key == pygame.K_SPACE:
                    self.sim.toggle_pause()
                elif event.key == pygame.K_a:
                    self.sim.toggle_aura()
                elif event.key == pygame.K_g:
                    enabled = self.sim.toggle_life_mode()
                    print(f"Game of Life mode: {'on' if enabled else 'off'}")
                elif event.key == pygame.K_c:
                    self.sim.clear()
                elif event.key == pygame.K_r:
                    self.sim.seed_random(RESEED_DOTS)
                elif event.key == pygame.K_s:
                    if self.sim.save_config(self.config_path):
                        print(f"Configuration saved to {self.config_path}")
                    else:
                        print(f"Could not save configuration to {self.config_path}")
                elif event.key == pygame.K_l:
                    if self.sim.load_config(self.config_path):
                        print(f"Configuration loaded from {self.config_path}")
                    else:
                        print(f"Could not load {self.config_path}, keeping current configuration")
                elif event.key == pygame.K_TAB:
                    selected = self.sim.cycle_selected_type()
                    print(f"Selected type: {selected.label}")
                elif event.key == pygame.K_1:
                    self.sim.adjust_max_speed(1.0)
                elif event.key == pygame.K_2:
                    self.sim.adjust_max_speed(-1.0)
                elif event.key == pygame.K_p:
                    self.next_preset()

        # Held mouse buttons keep placing / erasing
        left, _, right = pygame.mouse.get_pressed()
        if left or right:
            x, y = pygame.mouse.get_pos()
            if left:
                self.sim.add_dot(x, y)
            if right:
                self.sim.remove_near(x, y)

        return True

    def run(self):
        """Main simulation loop"""
        running = True

        while running:
            running = self.handle_events()

            # One tick per frame
            self.sim.step(1.0)

            self.draw()
            pygame.display.flip()
            self.clock.tick(60)

        pygame.quit()


def main(argv: Optional[list] = None) -> int:
    """Main entry point"""
    parser = argparse.ArgumentParser(description="DotGame - typed particles with Game of Life rules")
    parser.add_argument("--config", type=str, default=DEFAULT_CONFIG_PATH, help="Configuration file to load and save")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--count", type=int, default=INITIAL_DOTS, help="Number of dots to start with")
    parser.add_argument("--preset", type=str, default=None, choices=[p.name for p in list_presets()],
                        help="Start from a named preset")
    parser.add_argument("--type", type=DotType.from_name, default=None, dest="dot_type",
                        help="Seed only dots of this type")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("Starting DotGame...")
    print("Press SPACE to pause, G for Game of Life mode, Q to quit")

    sim = Simulation(DotConfig(), seed=args.seed)
    if args.preset:
        preset = sim.apply_preset(args.preset)
        print(f"Starting from preset '{preset.name}'")
    else:
        if sim.load_config(args.config):
            print(f"Loaded configuration from {args.config}")
        else:
            print(f"Configuration file {args.config} not usable, using default")
        sim.seed_random(args.count, args.dot_type)

    DotGameApp(sim, config_path=args.config).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
