from cmarkov.constrained_markov import ConstrainedMarkov
from cmarkov.constraints import CompositeConstraint, ForbiddenPairConstraint, PatternConstraint
from cmarkov.markov import MarkovModel
from cmarkov.options import Options

if __name__ == '__main__':
    # no "the cat", and the sentence must end with a word in -ee or -og
    with open('../data/nursery.txt', 'r') as file:
        lines = file.readlines()
    base_model = MarkovModel([line.split() for line in lines if line.strip()])
    policy = CompositeConstraint([PatternConstraint(), ForbiddenPairConstraint(pairs=[("the", "cat")])])
    cm = ConstrainedMarkov(policy, options=Options(sequence_count=10, layer_source="transitions"))
    cm.train(base_model, ["*", "*", "*", "*", "*", ".*(ee|og)"])
    for seq in cm.generate_sentences():
        print(' '.join(seq))
    cm.print_debug_info(Options(debug=True))
