# renderer/display.py
import numpy as np
import pygame

def show_image(image: np.ndarray, title: str = "Ray Tracer", max_window: int = 1280):
    """
    Opens a window showing an 8-bit (height, width, 3) image and blocks until it
    is closed or Escape is pressed.
    """
    pygame.init()
    try:
        height, width = image.shape[:2]
        # Small renders are scaled up by an integer factor to stay crisp
        factor = max(1, max_window // max(width, height))
        window_size = (width * factor, height * factor)

        screen = pygame.display.set_mode(window_size)
        pygame.display.set_caption(title)

        # surfarray expects (width, height, 3)
        surf = pygame.surfarray.make_surface(np.ascontiguousarray(image.swapaxes(0, 1)))
        surf = pygame.transform.scale(surf, window_size)

        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
            screen.blit(surf, (0, 0))
            pygame.display.flip()
            clock.tick(30)
    finally:
        pygame.quit()
