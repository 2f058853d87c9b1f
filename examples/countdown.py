"""Countdown with a pause -- the timer driven by a real-time loop.

Demonstrates:
- Subscribing to timer events before and after a call
- Pausing and resuming from inside event handlers
- Stopping the loop when the countdown finishes
- Reading the transition log afterwards

Run: python -m examples.countdown --seconds 3 --pause-at 2 --pause-for 1
"""

import argparse
import logging

from tick_countdown import CountdownTimer, Loop


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="tick-countdown demo")
    p.add_argument("--seconds", type=float, default=3, help="Countdown length (default: 3)")
    p.add_argument("--pause-at", type=int, default=0, metavar="N",
                   help="Pause on the N-th tick event (default: never)")
    p.add_argument("--pause-for", type=float, default=1.0,
                   help="Pause length in seconds (default: 1)")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    loop = Loop(tps=10)
    timer = CountdownTimer(loop=loop)
    ticks = [0]

    def on_tick(name, data):
        ticks[0] += 1
        print(f"  [{loop.clock.elapsed:5.1f}s] tick, {data['remaining']}s left")
        if ticks[0] == args.pause_at:
            timer.pause()

    def on_pause(name, data):
        print(f"  [{loop.clock.elapsed:5.1f}s] paused for {args.pause_for}s")
        resume_after = [round(args.pause_for * loop.tps)]

        def countdown_pause():
            resume_after[0] -= 1
            if resume_after[0] <= 0:
                handle.cancel()
                timer.pause()

        handle = loop.call_every(1, countdown_pause, name="resume")

    def on_finish(name, data):
        print(f"  [{loop.clock.elapsed:5.1f}s] finished")
        loop.request_stop()

    timer.on("tick", on_tick)
    timer.on("pause", on_pause)
    timer.on("resume", lambda name, data: print(f"  [{loop.clock.elapsed:5.1f}s] resumed"))
    timer.on("finish", on_finish)

    print(f"=== Countdown from {args.seconds}s ===\n")
    timer.start(args.seconds)
    loop.run_forever()

    print("\nLog:")
    for entry in timer.get_log():
        print(f"  {entry.timestamp:%H:%M:%S.%f} {entry.level:<7} {entry.message}")


if __name__ == "__main__":
    main()
