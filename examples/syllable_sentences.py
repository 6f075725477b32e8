"""
Copyright (c) 2025 Ynosound.
All rights reserved.
"""
from cmarkov.constrained_markov import ConstrainedMarkov
from cmarkov.markov import MarkovModel
from cmarkov.options import Options

if __name__ == '__main__':
    # six words of one syllable
    with open('../data/nursery.txt', 'r') as file:
        lines = file.readlines()
    base_model = MarkovModel([line.split() for line in lines if line.strip()])
    options = Options(sequence_count=5, layer_source="transitions", seed=3)
    cm = ConstrainedMarkov("syllables", options=options)
    cm.train(base_model, ["1"] * 6)
    for seq in cm.generate_sentences():
        print(' '.join(seq))
    cm.plot_layer_sizes("../data/syllable_layers.png")
