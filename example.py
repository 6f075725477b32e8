from cmarkov.constrained_markov import ConstrainedMarkov
from cmarkov.markov import MarkovModel
from cmarkov.options import Options

# Train the base model
with open("data/nursery.txt", "r") as file:
    sentences = [line.split() for line in file.read().splitlines() if line.strip()]
base_model = MarkovModel(sentences)

# six words, starting with "the" and with "on" or "to" in fourth position
options = Options(sequence_count=5, debug=True, seed=0)
generator = ConstrainedMarkov("lexical", options=options)
generator.train(base_model, ["the", "*", "*", "on|to", "*", "*"])

for sentence in generator.generate_sentences():
    print(" ".join(sentence), generator.get_sentence_probability(sentence))

generator.print_debug_info()
