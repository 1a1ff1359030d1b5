from payment_engine.cli import run

run()
