from observable_app.main import run

run()
