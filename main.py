# main.py
"""
Main entry point for the confetti demo.

This script orchestrates the whole lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Opens the window and mounts the particle system.
4. Runs the frame loop.
5. Handles clean shutdown.
"""
import logging
from utils import setup_logging, load_config, get_section
import cProfile
import pstats
import io


def main():
    """
    The main function to run the demo.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config('config.json')
    except Exception as e:
        print(f"FATAL: Could not load config.json. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Confetti Starting ---")

    effect_params = get_section(config, 'effect')
    run_params = get_section(config, 'run_control')
    vis_params = get_section(config, 'visualization')

    from particle import ParticleSystem
    from visualization import Visualizer

    # --- Component Initialization ---
    # 1. The visualizer owns the window, so it knows the canvas size.
    visualizer = Visualizer(
        width=vis_params['window_width'],
        height=vis_params['window_height'],
        fps=vis_params['fps'],
        background_color=vis_params['background_color'],
    )

    # 2. Mount the effect before layout is known, then report the size.
    activate_on_start = bool(effect_params.get('activate_on_start', True))
    system = ParticleSystem(effect_params, is_active=activate_on_start)
    system.resize(*visualizer.canvas_size)

    profiler = cProfile.Profile()

    log_throttle = max(1, int(run_params['log_throttle_steps']))
    max_steps = int(run_params['max_steps'])  # 0 runs until the user quits

    running = True
    step_num = 0
    settled_logged = False

    profiler.enable()
    while running:
        dt = visualizer.tick()
        system.advance(dt)
        step_num += 1

        if not visualizer.draw(system, system.frame()):
            running = False

        if visualizer.replay_requested:
            visualizer.replay_requested = False
            # The falling state is terminal, so a replay mounts a fresh system.
            system = ParticleSystem(effect_params, *visualizer.canvas_size, is_active=True)
            settled_logged = False
            logging.info("Replay requested. Mounted a new particle system.")

        if step_num % log_throttle == 0:
            logging.info(
                f"Frame {step_num} | state {system.activation.state} | "
                f"elapsed {system.elapsed:.2f}s"
            )

        if system.is_finished and not settled_logged:
            logging.debug(f"All {system.piece_count} pieces landed after {system.total_duration:.2f}s.")
            settled_logged = True

        if max_steps and step_num >= max_steps:
            logging.info(f"Reached max_steps ({max_steps}). Stopping.")
            running = False
    profiler.disable()

    visualizer.close()
    logging.info("Frame loop finished.")

    logging.info("--- Performance Profile ---")
    s = io.StringIO()
    stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
    stats.print_stats(20)
    logging.info(f"\n{s.getvalue()}")

    logging.info("--- Confetti Shutting Down ---")


if __name__ == "__main__":
    main()
