from webcam_uploads.main import run

run()
