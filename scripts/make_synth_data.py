import logging

from synth_als.config import GenConfig
from synth_als.generate import generate_to_dir


def main(out_dir="synthetic_data", nusers=1000, nitems=10000, seed=31413):
    logging.basicConfig(level=logging.INFO)
    config = GenConfig(out_dir=out_dir, nusers=nusers, nitems=nitems, seed=seed)
    result = generate_to_dir(config, progress=True)
    print("Wrote", out_dir, "train", result.n_train, "validation", result.n_validation)


if __name__ == "__main__":
    main()
