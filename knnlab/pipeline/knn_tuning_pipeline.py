# knnlab/pipeline/knn_tuning_pipeline.py

from kfp import dsl
from kfp.dsl import Input, Output, Artifact

TRAIN_IMAGE = "quay.io/knnlab/knnlab-train:amd64"


# 1. TUNE + TRAIN STEP ---------------------------------------------------------
@dsl.component(
    base_image=TRAIN_IMAGE,
)
def tune_knn(
    # artifact comes FIRST, no default
    model_dir: Output[Artifact],
    dataset: str = "iris_builtin",
    n_folds: int = 5,
    neighbors: str = "1,3,5,7,9",
    test_size: float = 0.2,
    save_model_name: str = "knn_pipeline",
):
    """
    Step 1: K-Fold tune a KNN model and write artifacts into model_dir.
    """
    import os
    from pathlib import Path
    import shutil

    os.environ["KNNLAB_DATASET"] = dataset
    os.environ["KNNLAB_N_FOLDS"] = str(n_folds)
    os.environ["KNNLAB_NEIGHBORS"] = neighbors
    os.environ["KNNLAB_TEST_SIZE"] = str(test_size)
    os.environ["KNNLAB_SAVE_MODEL_NAME"] = save_model_name
    os.environ["KNNLAB_OUTPUT_DIR"] = "/tmp/output"

    out_dir = Path("/tmp/output")
    out_dir.mkdir(parents=True, exist_ok=True)

    # Imported after the env is set: tune_step reads it at import time
    from knnlab.pipeline.tune_step import main as tune_main

    tune_main()

    model_dir_path = Path(model_dir.path)
    model_dir_path.mkdir(parents=True, exist_ok=True)

    for p in out_dir.iterdir():
        if p.is_file():
            print(f"Copying artifact {p.name} -> {model_dir_path}")
            shutil.copy2(p, model_dir_path / p.name)


# 2. EVALUATE STEP -------------------------------------------------------------
@dsl.component(
    base_image=TRAIN_IMAGE,
)
def evaluate_knn(
    model_dir: Input[Artifact],
    metrics_dir: Output[Artifact],
):
    """
    Step 2: Publish the test metrics and the chosen k.

    - Reads meta.json from model_dir.
    - Writes metrics.json into metrics_dir.
    """
    from pathlib import Path
    import json

    meta_path = Path(model_dir.path) / "meta.json"
    if not meta_path.exists():
        raise FileNotFoundError(f"meta.json not found in {model_dir.path}")

    with meta_path.open("r", encoding="utf-8") as f:
        meta = json.load(f)

    extra = meta.get("extra", {})
    metrics = {
        **meta.get("metrics", {}),
        "n_neighbors": extra.get("n_neighbors"),
        "weights": extra.get("weights"),
    }
    cv = extra.get("cv")
    if cv:
        metrics["cv_metric"] = cv["metric"]
        metrics["cv_best_mean"] = cv["best"]["mean"]
    print("Metrics:", metrics)

    metrics_dir_path = Path(metrics_dir.path)
    metrics_dir_path.mkdir(parents=True, exist_ok=True)

    with (metrics_dir_path / "metrics.json").open("w", encoding="utf-8") as f:
        json.dump(metrics, f, indent=2)


# PIPELINE DEFINITION ----------------------------------------------------------
@dsl.pipeline(
    name="knn-kfold-tuning-pipeline",
    description="K-Fold tune, train and evaluate a KNN model with knnlab.",
)
def knn_tuning_pipeline(
    dataset: str = "iris_builtin",
    n_folds: int = 5,
    neighbors: str = "1,3,5,7,9",
    test_size: float = 0.2,
):
    tune_step = tune_knn(
        dataset=dataset,
        n_folds=n_folds,
        neighbors=neighbors,
        test_size=test_size,
        save_model_name="knn_pipeline",
    )

    _ = evaluate_knn(
        model_dir=tune_step.outputs["model_dir"],
    )


if __name__ == "__main__":
    from kfp import compiler

    compiler.Compiler().compile(
        pipeline_func=knn_tuning_pipeline,
        package_path="knn_tuning_pipeline.yaml",
    )
