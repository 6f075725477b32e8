"""
Copyright (c) 2025 Ynosound.
All rights reserved.
"""
from cmarkov.constrained_markov import ConstrainedMarkov
from cmarkov.markov import MarkovModel
from cmarkov.options import Options

if __name__ == '__main__':
    # computes sentences of length 7 with "cat" as third word, using the whole corpus as a first order model
    with open('../data/nursery.txt', 'r') as file:
        lines = file.readlines()
    base_model = MarkovModel([line.split() for line in lines if line.strip()])
    base_model.show_structure()
    options = Options(sequence_count=10, layer_source="transitions", normalization="pachet")
    cm = ConstrainedMarkov("lexical", options=options)
    cm.train(base_model, ["*", "*", "cat", "*", "*", "*", "*"])
    for seq in cm.generate_sentences():
        print(' '.join(seq))
    print(f"{cm.get_total_solution_count()} possible sentences")
