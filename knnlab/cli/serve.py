# knnlab/cli/serve.py

import argparse
import os

import uvicorn


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve a KNNLab model via FastAPI.")
    parser.add_argument(
        "--model-name",
        default="default_model",
        help="Trained model directory under artifacts/pretrained/ to load.",
    )
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    return parser.parse_args()


def main():
    args = parse_args()

    # Tell knnlab.serve which model to load
    os.environ["KNNLAB_MODEL_NAME"] = args.model_name

    uvicorn.run(
        "knnlab.serve:app",
        host=args.host,
        port=args.port,
        reload=False,
    )


if __name__ == "__main__":
    main()
